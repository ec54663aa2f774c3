"""CommunityCode model — one registry row per distinct physical address."""

import uuid

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from hubit_api.models.base import Base, TimestampMixin, UUIDMixin


class CommunityCode(Base, UUIDMixin, TimestampMixin):
    """Community code minted for an address tuple.

    Attributes:
        code: Derived human-readable code (e.g. ``ESP-AND-SEV-GRANVA0007``). Not
            unique: distinct addresses with the same prefixes share a code.
        country, province, city, street, street_number: The address tuple,
            stored exactly as received. Unique as a group.
        created_by: User who first requested the code.
    """

    __tablename__ = "community_codes"

    code: Mapped[str] = mapped_column(String(64), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    province: Mapped[str] = mapped_column(String(100), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    street: Mapped[str] = mapped_column(String(200), nullable=False)
    street_number: Mapped[str] = mapped_column(String(20), nullable=False)
    created_by: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id"), nullable=False, index=True)

    __table_args__ = (
        Index("ix_community_codes_code", "code"),
        UniqueConstraint(
            "country",
            "province",
            "city",
            "street",
            "street_number",
            name="uq_community_codes_address",
        ),
    )
