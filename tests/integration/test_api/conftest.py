"""Fixtures for HTTP-level tests against the versioned API router."""

from collections.abc import AsyncGenerator, Callable

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hubit_api.api.router import create_router
from hubit_api.core.config import Settings, get_settings
from hubit_api.core.dependencies import get_async_session
from hubit_api.main import register_exception_handlers
from hubit_api.models.user import User


def _make_app(settings: Settings, session_factory: async_sessionmaker[AsyncSession]) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(create_router(settings))

    async def _session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = _session
    app.dependency_overrides[get_settings] = lambda: settings
    return app


@pytest.fixture
async def client(
    settings: Settings, session_factory: async_sessionmaker[AsyncSession]
) -> AsyncGenerator[AsyncClient]:
    transport = ASGITransport(app=_make_app(settings, session_factory))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers(make_token: Callable[[User], str]) -> Callable[[User], dict[str, str]]:
    """Return a helper building an ``Authorization`` header for a stored user."""

    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(user)}"}

    return _headers
