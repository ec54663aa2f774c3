"""Tests for authentication Pydantic schemas."""

import pytest
from pydantic import ValidationError

from hubit_api.core.roles import UserRole
from hubit_api.schemas.auth import Identity, LoginRequest, RegisterRequest, TokenResponse
from hubit_api.schemas.common import ErrorResponse


class TestRegisterRequest:
    def test_valid(self) -> None:
        request = RegisterRequest(
            email="ana@hubit.es",
            password="secreto",
            full_name="Ana",
            role="community_member",
        )
        assert request.role is UserRole.COMMUNITY_MEMBER

    def test_unknown_role_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(email="ana@hubit.es", password="secreto", full_name="Ana", role="superuser")

    def test_short_password_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(email="ana@hubit.es", password="123", full_name="Ana", role="particular")

    def test_invalid_email_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LoginRequest(email="not-an-email", password="x")


class TestIdentity:
    def test_frozen(self) -> None:
        identity = Identity(subject_id="u-1", email="ana@hubit.es", role=UserRole.PARTICULAR)
        with pytest.raises(ValidationError):
            identity.role = UserRole.ADMINISTRATOR  # type: ignore[misc]


class TestTokenResponse:
    def test_default_token_type(self) -> None:
        assert TokenResponse(access_token="abc", expires_in=60).token_type == "bearer"


class TestErrorResponse:
    def test_code_omitted_when_unset(self) -> None:
        assert ErrorResponse(detail="boom").model_dump(exclude_none=True) == {"detail": "boom"}
