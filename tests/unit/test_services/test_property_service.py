"""Tests for the property service."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from hubit_api.core.exceptions import ValidationError
from hubit_api.models.user import User
from hubit_api.schemas.property import PropertyCreateRequest
from hubit_api.services.community_code_service import get_by_code, get_properties_with_code
from hubit_api.services.property_service import create_property, list_properties


def _request(**overrides: str) -> PropertyCreateRequest:
    data = {
        "name": "Piso centro",
        "country": "España",
        "province": "Andalucía",
        "city": "Sevilla",
        "street": "Gran Vía",
        "street_number": "7",
        "floor": "3",
        "door": "B",
    }
    data.update(overrides)
    return PropertyCreateRequest(**data)


class TestCreateProperty:
    async def test_first_property_mints_code(self, async_session: AsyncSession, particular_user: User) -> None:
        prop, is_new = await create_property(async_session, particular_user.id, _request())

        assert is_new is True
        assert prop.community_code == "ESP-AND-SEV-GRANVA0007"
        assert prop.owner_id == particular_user.id
        assert prop.floor == "3"
        record = await get_by_code(async_session, prop.community_code)
        assert record is not None
        assert record.created_by == particular_user.id

    async def test_neighbours_share_code(
        self, async_session: AsyncSession, particular_user: User, member_user: User
    ) -> None:
        first, _ = await create_property(async_session, particular_user.id, _request())
        second, is_new = await create_property(async_session, member_user.id, _request(name="Piso vecino", door="C"))

        assert is_new is False
        assert second.community_code == first.community_code
        sharing = await get_properties_with_code(async_session, first.community_code)
        assert sharing.total_users == 2

    async def test_invalid_address_creates_nothing(self, async_session: AsyncSession, particular_user: User) -> None:
        with pytest.raises(ValidationError):
            await create_property(async_session, particular_user.id, _request(street_number="siete"))
        assert await list_properties(async_session, particular_user.id) == []


class TestListProperties:
    async def test_only_owner_properties(
        self, async_session: AsyncSession, particular_user: User, member_user: User
    ) -> None:
        await create_property(async_session, particular_user.id, _request())
        await create_property(async_session, particular_user.id, _request(street="Calle Mayor", street_number="12"))
        await create_property(async_session, member_user.id, _request())

        mine = await list_properties(async_session, particular_user.id)
        assert len(mine) == 2
        assert {p.community_code for p in mine} == {"ESP-AND-SEV-GRANVA0007", "ESP-AND-SEV-CALLEM0012"}
        assert await list_properties(async_session, member_user.id) != []
