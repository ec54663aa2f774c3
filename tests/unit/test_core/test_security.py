"""Unit tests for JWT and password security module."""

import jwt as pyjwt
import pytest

from hubit_api.core.security import create_access_token, decode_token, hash_password, verify_password


class TestPasswordHashing:
    """Tests for bcrypt password hashing and verification."""

    def test_hash_and_verify(self) -> None:
        hashed = hash_password("mypassword123")
        assert verify_password("mypassword123", hashed)

    def test_wrong_password_fails(self) -> None:
        hashed = hash_password("mypassword123")
        assert not verify_password("wrongpassword", hashed)

    def test_hash_is_different_each_time(self) -> None:
        """Same password produces different hashes (salt)."""
        assert hash_password("same") != hash_password("same")


class TestJWT:
    """Tests for JWT token creation and decoding."""

    SECRET = "test-secret-key-for-testing-32chars"

    def test_create_and_decode_access_token(self) -> None:
        token = create_access_token("user-1", "ana@hubit.es", "particular", self.SECRET)
        payload = decode_token(token, self.SECRET)
        assert payload["sub"] == "user-1"
        assert payload["email"] == "ana@hubit.es"
        assert payload["role"] == "particular"
        assert payload["type"] == "access"
        assert "exp" in payload

    def test_decode_with_wrong_secret_fails(self) -> None:
        token = create_access_token("user-1", "ana@hubit.es", "particular", self.SECRET)
        with pytest.raises(pyjwt.InvalidSignatureError):
            decode_token(token, "another-secret-key-for-testing-32c")

    def test_expired_token_fails(self) -> None:
        token = create_access_token("user-1", "ana@hubit.es", "particular", self.SECRET, expires_minutes=-1)
        with pytest.raises(pyjwt.ExpiredSignatureError):
            decode_token(token, self.SECRET)

    def test_token_without_expiry_fails(self) -> None:
        token = pyjwt.encode({"sub": "user-1", "role": "particular"}, self.SECRET, algorithm="HS256")
        with pytest.raises(pyjwt.MissingRequiredClaimError):
            decode_token(token, self.SECRET)

    def test_malformed_token_string(self) -> None:
        with pytest.raises(pyjwt.DecodeError):
            decode_token("not.a.valid.token.at.all", self.SECRET)

    def test_algorithm_none_rejected(self) -> None:
        token = pyjwt.encode({"sub": "user-1", "exp": 9999999999}, key=None, algorithm="none")
        with pytest.raises(pyjwt.InvalidTokenError):
            decode_token(token, self.SECRET)
