"""Tests for the authentication and account service."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from hubit_api.core.config import Settings
from hubit_api.core.dependencies import authorize
from hubit_api.core.exceptions import ConflictError
from hubit_api.core.roles import UserRole
from hubit_api.core.security import verify_password
from hubit_api.models.user import User
from hubit_api.schemas.auth import RegisterRequest
from hubit_api.services.auth_service import (
    authenticate_user,
    generate_token,
    get_user,
    get_user_by_email,
    list_users,
    register_user,
)


def _register_request(email: str = "nuevo@hubit.es", role: UserRole = UserRole.PARTICULAR) -> RegisterRequest:
    return RegisterRequest(email=email, password="secreto123", full_name="Nuevo Usuario", role=role)


class TestRegisterUser:
    async def test_register_stores_hashed_password(self, async_session: AsyncSession) -> None:
        user = await register_user(async_session, _register_request())

        assert user.id is not None
        assert user.role == "particular"
        assert user.hashed_password != "secreto123"
        assert verify_password("secreto123", user.hashed_password)

    async def test_duplicate_email_conflict(self, async_session: AsyncSession, particular_user: User) -> None:
        with pytest.raises(ConflictError, match="already exists"):
            await register_user(async_session, _register_request(email=particular_user.email))

    async def test_service_provider_registration(self, async_session: AsyncSession) -> None:
        user = await register_user(async_session, _register_request(role=UserRole.SERVICE_PROVIDER))
        assert user.role == UserRole.SERVICE_PROVIDER.value


class TestAuthenticateUser:
    async def test_valid_credentials(self, async_session: AsyncSession, particular_user: User) -> None:
        user = await authenticate_user(async_session, particular_user.email, "testpassword123")
        assert user is not None
        assert user.id == particular_user.id
        assert user.last_login_at is not None

    async def test_wrong_password(self, async_session: AsyncSession, particular_user: User) -> None:
        assert await authenticate_user(async_session, particular_user.email, "wrong") is None

    async def test_unknown_email(self, async_session: AsyncSession) -> None:
        assert await authenticate_user(async_session, "nadie@hubit.es", "testpassword123") is None

    async def test_inactive_account(self, async_session: AsyncSession, particular_user: User) -> None:
        particular_user.is_active = False
        await async_session.commit()
        assert await authenticate_user(async_session, particular_user.email, "testpassword123") is None


class TestLookups:
    async def test_get_user_and_by_email(self, async_session: AsyncSession, admin_user: User) -> None:
        assert (await get_user(async_session, admin_user.id)) is admin_user
        assert (await get_user_by_email(async_session, "admin@hubit.es")) is admin_user

    async def test_list_users_paginates(
        self, async_session: AsyncSession, admin_user: User, member_user: User, particular_user: User
    ) -> None:
        users, total = await list_users(async_session, page=1, page_size=2)
        assert total == 3
        assert len(users) == 2

        rest, _ = await list_users(async_session, page=2, page_size=2)
        assert len(rest) == 1


class TestGenerateToken:
    async def test_token_carries_identity_claim(self, settings: Settings, member_user: User) -> None:
        token = generate_token(member_user, settings)

        assert token.token_type == "bearer"
        assert token.expires_in == settings.jwt_access_token_expire_minutes * 60
        identity = authorize(f"Bearer {token.access_token}", settings.jwt_secret_key, settings.jwt_algorithm)
        assert identity.subject_id == str(member_user.id)
        assert identity.email == member_user.email
        assert identity.role == UserRole.COMMUNITY_MEMBER
