"""Shared test fixtures for async database, sessions, and auth tokens."""

import uuid
from collections.abc import AsyncGenerator, Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from hubit_api.core.config import Settings
from hubit_api.core.database import enable_sqlite_foreign_keys
from hubit_api.core.roles import UserRole
from hubit_api.core.security import create_access_token, hash_password
from hubit_api.models.base import Base
from hubit_api.models.user import User

TEST_SECRET = "test-secret-key-not-for-production"


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret_key=TEST_SECRET,
        jwt_algorithm="HS256",
        jwt_access_token_expire_minutes=60,
    )


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory async SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, expire_on_commit=False)


@pytest.fixture
async def async_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession]:
    """Per-test async session."""
    async with session_factory() as session:
        yield session


async def _make_user(session: AsyncSession, email: str, role: UserRole) -> User:
    user = User(
        id=uuid.uuid4(),
        email=email,
        full_name=email.split("@")[0].title(),
        hashed_password=hash_password("testpassword123"),
        role=role.value,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def admin_user(async_session: AsyncSession) -> User:
    """An administrator stored in the test database."""
    return await _make_user(async_session, "admin@hubit.es", UserRole.ADMINISTRATOR)


@pytest.fixture
async def member_user(async_session: AsyncSession) -> User:
    """A community member stored in the test database."""
    return await _make_user(async_session, "member@hubit.es", UserRole.COMMUNITY_MEMBER)


@pytest.fixture
async def particular_user(async_session: AsyncSession) -> User:
    """A particular (private owner) stored in the test database."""
    return await _make_user(async_session, "particular@hubit.es", UserRole.PARTICULAR)


@pytest.fixture
def make_token(settings: Settings) -> Callable[[User], str]:
    """Return a helper that mints an access token for a stored user."""

    def _make(user: User) -> str:
        return create_access_token(
            subject=str(user.id),
            email=user.email,
            role=user.role,
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )

    return _make


@pytest.fixture
def provider_token(settings: Settings) -> str:
    """Access token for a service provider with no stored account."""
    return create_access_token(
        subject=str(uuid.uuid4()),
        email="provider@hubit.es",
        role=UserRole.SERVICE_PROVIDER.value,
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )
