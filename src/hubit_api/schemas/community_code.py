"""Community code Pydantic v2 schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from hubit_api.lib.community_code import AddressTuple


class AddressRequest(BaseModel):
    """Address tuple submitted by a caller.

    Field contents are checked again by the registry; these constraints only
    catch missing or oversized values early.
    """

    country: str = Field(min_length=1, max_length=100, examples=["España"])
    province: str = Field(min_length=1, max_length=100, examples=["Andalucía"])
    city: str = Field(min_length=1, max_length=100, examples=["Sevilla"])
    street: str = Field(min_length=1, max_length=200, examples=["Gran Vía"])
    street_number: str = Field(min_length=1, max_length=20, examples=["7"])

    def to_address(self) -> AddressTuple:
        return AddressTuple(
            country=self.country,
            province=self.province,
            city=self.city,
            street=self.street,
            street_number=self.street_number,
        )


class CodeResult(BaseModel):
    """Outcome of get-or-create: the code and whether this call minted it."""

    code: str
    is_new: bool


class CommunityCodeResponse(BaseModel):
    """Stored community code record."""

    id: UUID
    code: str
    country: str
    province: str
    city: str
    street: str
    street_number: str
    created_by: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CommunityCodeListResponse(BaseModel):
    items: list[CommunityCodeResponse]


class CodePropertySummary(BaseModel):
    """Property that carries a given community code."""

    id: UUID
    name: str
    owner_id: UUID
    created_at: datetime

    model_config = {"from_attributes": True}


class CodeSharingResponse(BaseModel):
    """A community code together with every property using it."""

    community_code: CommunityCodeResponse
    properties: list[CodePropertySummary]
    total_users: int = Field(description="Number of distinct owners among the properties")


class SharedCode(BaseModel):
    code: str
    user_count: int


class CodeStatisticsResponse(BaseModel):
    """Registry-wide counts."""

    total_codes: int
    total_properties: int
    shared_codes: list[SharedCode] = Field(description="Codes used by more than one owner, most shared first")
