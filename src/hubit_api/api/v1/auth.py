"""Authentication API endpoints.

POST /auth/register, POST /auth/login, GET /auth/me, GET /health, GET /info.
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from hubit_api import __version__
from hubit_api.core.config import Settings, get_settings
from hubit_api.core.dependencies import get_async_session, get_current_identity
from hubit_api.core.exceptions import AuthenticationError
from hubit_api.schemas.auth import (
    Identity,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserResponse,
)
from hubit_api.services import auth_service

router = APIRouter(tags=["auth"])


@router.get("/health", status_code=200)
async def health_check() -> dict:
    """Health check endpoint (no authentication required)."""
    return {"status": "healthy"}


@router.get("/info", status_code=200)
async def info(
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict:
    """Return application version and environment."""
    return {
        "version": __version__,
        "environment": settings.environment,
    }


@router.post("/auth/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> RegisterResponse:
    """Register a new account and return it with an access token."""
    user = await auth_service.register_user(session, request)
    return RegisterResponse(
        user=UserResponse.model_validate(user),
        token=auth_service.generate_token(user, settings),
    )


@router.post("/auth/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenResponse:
    """Authenticate with email and password and return an access token."""
    user = await auth_service.authenticate_user(session, request.email, request.password)
    if user is None:
        raise AuthenticationError("Invalid credentials", kind="invalid_credentials")
    return auth_service.generate_token(user, settings)


@router.get("/auth/me", response_model=ProfileResponse)
async def get_me(
    identity: Annotated[Identity, Depends(get_current_identity)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ProfileResponse:
    """Return the caller's token identity and stored profile."""
    try:
        user = await auth_service.get_user(session, uuid.UUID(identity.subject_id))
    except ValueError:
        user = None
    return ProfileResponse(
        identity=identity,
        user=UserResponse.model_validate(user) if user is not None else None,
    )
