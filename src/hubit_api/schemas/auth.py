"""Authentication and user Pydantic v2 schemas.

Defines request/response schemas for registration, login, and the decoded
identity attached to authorized requests.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from hubit_api.core.roles import UserRole


class Identity(BaseModel):
    """Identity decoded from a verified access token."""

    subject_id: str
    email: str
    role: UserRole

    model_config = {"frozen": True}


class LoginRequest(BaseModel):
    """Login request with email and password."""

    email: EmailStr
    password: str = Field(min_length=1)


class RegisterRequest(BaseModel):
    """Self-service account registration."""

    email: EmailStr
    password: str = Field(min_length=6, description="Plaintext password, at least 6 characters")
    full_name: str = Field(min_length=1, max_length=200)
    role: UserRole
    phone: str | None = Field(default=None, max_length=30)


class TokenResponse(BaseModel):
    """Access token response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Access token expiration in seconds")


class UserResponse(BaseModel):
    """User information response."""

    id: UUID
    email: str
    full_name: str
    role: UserRole
    phone: str | None = None
    is_active: bool
    created_at: datetime
    last_login_at: datetime | None = None

    model_config = {"from_attributes": True}


class RegisterResponse(BaseModel):
    """Newly registered user together with a ready-to-use token."""

    user: UserResponse
    token: TokenResponse


class ProfileResponse(BaseModel):
    """The caller's token identity plus the stored account, when one exists."""

    identity: Identity
    user: UserResponse | None = None
