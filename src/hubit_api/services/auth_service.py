"""Authentication and account service.

Handles registration, credential checks, and minting the access tokens the
request authorizer validates.
"""

import uuid
from datetime import UTC, datetime

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hubit_api.core.config import Settings
from hubit_api.core.exceptions import ConflictError
from hubit_api.core.security import create_access_token, hash_password, verify_password
from hubit_api.models.user import User
from hubit_api.schemas.auth import RegisterRequest, TokenResponse


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    """Get a user by email address."""
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user(session: AsyncSession, user_id: uuid.UUID) -> User | None:
    """Get a user by ID.

    Args:
        session: The database session.
        user_id: The UUID of the user to retrieve.

    Returns:
        The User if found, None otherwise.
    """
    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def authenticate_user(session: AsyncSession, email: str, password: str) -> User | None:
    """Authenticate a user by email and password.

    Args:
        session: The database session.
        email: The account email.
        password: The plaintext password.

    Returns:
        The User if authentication succeeds, None otherwise.
    """
    user = await get_user_by_email(session, email)
    if user is None or not verify_password(password, user.hashed_password):
        return None
    if not user.is_active:
        logger.info(f"Login refused for deactivated account {user.id}")
        return None
    user.last_login_at = datetime.now(UTC)
    await session.commit()
    return user


async def register_user(session: AsyncSession, request: RegisterRequest) -> User:
    """Create a new account.

    Args:
        session: The database session.
        request: Registration data.

    Returns:
        The created User.

    Raises:
        ConflictError: If the email is already registered.
    """
    if await get_user_by_email(session, request.email) is not None:
        msg = "User already exists with this email"
        raise ConflictError(msg)

    user = User(
        email=request.email,
        full_name=request.full_name,
        hashed_password=hash_password(request.password),
        role=request.role.value,
        phone=request.phone,
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        msg = "User already exists with this email"
        raise ConflictError(msg) from None
    await session.refresh(user)
    logger.info(f"Registered user {user.id} with role {user.role}")
    return user


async def list_users(session: AsyncSession, page: int = 1, page_size: int = 20) -> tuple[list[User], int]:
    """List users with pagination.

    Args:
        session: The database session.
        page: Page number (1-based).
        page_size: Items per page.

    Returns:
        Tuple of (users list, total count).
    """
    count_result = await session.execute(select(func.count(User.id)))
    total = count_result.scalar_one()

    offset = (page - 1) * page_size
    result = await session.execute(select(User).offset(offset).limit(page_size).order_by(User.created_at))
    users = list(result.scalars().all())
    return users, total


def generate_token(user: User, settings: Settings) -> TokenResponse:
    """Mint an access token whose claim carries the user's id, email and role.

    Args:
        user: The authenticated user.
        settings: Application settings.

    Returns:
        Token response.
    """
    access_token = create_access_token(
        subject=str(user.id),
        email=user.email,
        role=user.role,
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_minutes=settings.jwt_access_token_expire_minutes,
    )
    return TokenResponse(
        access_token=access_token,
        expires_in=settings.jwt_access_token_expire_minutes * 60,
    )
