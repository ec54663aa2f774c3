"""FastAPI dependency injection for database sessions, auth, and access control.

Provides get_async_session, the bearer-token authorizer guard
(``authorize`` / ``get_current_identity``) and the ``require_role`` factory.
Every protected route composes these instead of checking tokens itself.
"""

import uuid
from collections.abc import AsyncGenerator, Callable
from typing import Annotated, Any

import jwt
from fastapi import Depends, Request
from fastapi.security import APIKeyHeader
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from hubit_api.core.config import Settings, get_settings
from hubit_api.core.database import get_session_factory
from hubit_api.core.exceptions import AuthenticationError, AuthorizationError
from hubit_api.core.roles import UserRole, is_known_role
from hubit_api.core.security import ACCESS_TOKEN_TYPE, decode_token
from hubit_api.schemas.auth import Identity

# APIKeyHeader hands us the raw header so scheme parsing stays in authorize()
authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="Bearer access token: `Bearer <token>`",
)

CREDENTIAL_REQUIRED = "Credential required"
CREDENTIAL_INVALID = "Credential invalid"


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Yield an async database session with per-request lifecycle."""
    factory = get_session_factory()
    async with factory() as session:
        yield session


def extract_bearer_token(header: str | None) -> str | None:
    """Return the token of a ``Bearer <token>`` header, or None if there is none.

    The scheme is matched case-insensitively.
    """
    if not header:
        return None
    scheme, _, token = header.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


def authorize(header: str | None, secret_key: str, algorithm: str = "HS256") -> Identity:
    """Validate a bearer credential and return the identity it carries.

    Args:
        header: Raw ``Authorization`` header value.
        secret_key: Shared verification secret.
        algorithm: JWT signing algorithm.

    Returns:
        The decoded identity.

    Raises:
        AuthenticationError: If no bearer credential is present.
        AuthorizationError: If the credential is malformed, expired, signed
            with another key, or carries an unknown role.
    """
    token = extract_bearer_token(header)
    if token is None:
        raise AuthenticationError(CREDENTIAL_REQUIRED)

    try:
        payload = decode_token(token, secret_key, algorithm)
    except jwt.InvalidTokenError as exc:
        logger.debug(f"Rejected credential: {type(exc).__name__}")
        raise AuthorizationError(CREDENTIAL_INVALID) from exc

    role = payload.get("role")
    email = payload.get("email")
    if payload.get("type") != ACCESS_TOKEN_TYPE or not is_known_role(role) or not isinstance(email, str):
        raise AuthorizationError(CREDENTIAL_INVALID)

    return Identity(subject_id=str(payload["sub"]), email=email, role=UserRole(role))


async def get_current_identity(
    request: Request,
    header: Annotated[str | None, Depends(authorization_header)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Identity:
    """Authorize the request and attach the identity to ``request.state``.

    Raises:
        AuthenticationError: If no credential is present.
        AuthorizationError: If the credential is invalid.
    """
    identity = authorize(header, settings.jwt_secret_key, settings.jwt_algorithm)
    request.state.identity = identity
    return identity


async def get_current_user_id(
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> uuid.UUID:
    """Return the authorized subject as a user id.

    Raises:
        AuthorizationError: If the token subject is not a UUID.
    """
    try:
        return uuid.UUID(identity.subject_id)
    except ValueError as exc:
        raise AuthorizationError(CREDENTIAL_INVALID) from exc


def require_role(*roles: str) -> Callable[..., Any]:
    """Factory that creates a dependency requiring specific user roles.

    Args:
        *roles: Allowed role names (e.g., "administrator", "particular").

    Returns:
        A FastAPI dependency function that validates the caller's role.
    """

    async def role_checker(
        identity: Annotated[Identity, Depends(get_current_identity)],
    ) -> Identity:
        if identity.role not in roles:
            raise AuthorizationError(
                f"Role '{identity.role}' does not have access to this resource",
                kind="forbidden",
            )
        return identity

    return role_checker
