"""Property Pydantic v2 schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from hubit_api.schemas.community_code import AddressRequest


class PropertyCreateRequest(AddressRequest):
    """New property; the address fields double as its community code key."""

    name: str = Field(min_length=1, max_length=200)
    floor: str | None = Field(default=None, max_length=20)
    door: str | None = Field(default=None, max_length=20)


class PropertyResponse(BaseModel):
    id: UUID
    name: str
    owner_id: UUID
    community_code: str
    country: str
    province: str
    city: str
    street: str
    street_number: str
    floor: str | None = None
    door: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class PropertyCreateResponse(BaseModel):
    """Created property plus whether its community code was minted by this request."""

    property: PropertyResponse
    community_code_is_new: bool


class PropertyListResponse(BaseModel):
    items: list[PropertyResponse]
