"""ORM model registry — import all models so Alembic autogenerate discovers them."""

from hubit_api.models.community_code import CommunityCode
from hubit_api.models.property import Property
from hubit_api.models.user import User

__all__ = [
    "CommunityCode",
    "Property",
    "User",
]
