"""
Unit Tests for Security Module
Tests for: password hashing, JWT access/refresh tokens
"""
import pytest
from types import SimpleNamespace
from datetime import datetime, timedelta
from jose import jwt
from fastapi import HTTPException

from app.core.security import (
    verify_password,
    get_password_hash,
    create_access_token,
    create_refresh_token,
    create_token_pair,
    decode_token,
)
from app.core.config import settings
from app.models.user import UserRole


class TestPasswordHashing:
    """Test password hashing functions"""

    def test_hash_password_returns_different_value(self):
        """Test that hashing returns a different value than input"""
        password = "testpassword123"
        hashed = get_password_hash(password)

        assert hashed != password
        assert len(hashed) > 0

    def test_hash_password_different_each_time(self):
        """Test that hashing same password returns different hashes"""
        password = "testpassword123"

        # Bcrypt generates different salts
        assert get_password_hash(password) != get_password_hash(password)

    def test_verify_password_correct(self):
        password = "testpassword123"
        hashed = get_password_hash(password)

        assert verify_password(password, hashed) is True

    def test_verify_password_incorrect(self):
        hashed = get_password_hash("testpassword123")

        assert verify_password("wrongpassword", hashed) is False

    def test_verify_password_empty_hash(self):
        """Accounts without a stored hash never authenticate"""
        assert verify_password("anything", "") is False

    def test_hash_long_password_truncated(self):
        """Test that long passwords are truncated to bcrypt limit"""
        # Bcrypt has 72 byte limit
        long_password = "a" * 100
        hashed = get_password_hash(long_password)

        assert verify_password(long_password, hashed) is True
        assert verify_password("a" * 72, hashed) is True

    def test_hash_unicode_password(self):
        password = "pässwörd-नमस्ते"
        hashed = get_password_hash(password)

        assert verify_password(password, hashed) is True


class TestAccessToken:
    """Test access token functions"""

    def test_create_access_token(self):
        token = create_access_token({"sub": "user123", "email": "test@example.com"})

        assert isinstance(token, str)
        assert len(token) > 0

    def test_create_access_token_with_expiry(self):
        """Test creating access token with custom expiry"""
        token = create_access_token({"sub": "user123"}, expires_delta=timedelta(hours=1))

        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        remaining = (datetime.utcfromtimestamp(payload["exp"]) - datetime.utcnow()).total_seconds()

        # Should expire in about 1 hour
        assert 3500 < remaining < 3700

    def test_access_token_has_type(self):
        payload = decode_token(create_access_token({"sub": "user123"}))

        assert payload["type"] == "access"
        assert payload["sub"] == "user123"


class TestRefreshToken:
    """Test refresh token functions"""

    def test_refresh_token_has_type(self):
        payload = decode_token(create_refresh_token({"sub": "user123"}))

        assert payload["type"] == "refresh"

    def test_refresh_token_long_expiry(self):
        """Refresh tokens outlive access tokens"""
        payload = decode_token(create_refresh_token({"sub": "user123"}))
        remaining = datetime.utcfromtimestamp(payload["exp"]) - datetime.utcnow()

        assert remaining > timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS - 1)


class TestTokenPair:
    """Test token pair issued on login and register"""

    def test_pair_carries_user_claims(self):
        user = SimpleNamespace(id="abc-123", email="prof@vit.edu", role=UserRole.FACULTY)

        tokens = create_token_pair(user)
        access = decode_token(tokens["token"])
        refresh = decode_token(tokens["refresh_token"])

        assert access["sub"] == "abc-123"
        assert access["email"] == "prof@vit.edu"
        assert access["role"] == "faculty"
        assert access["type"] == "access"
        assert refresh["type"] == "refresh"


class TestDecodeToken:
    """Test token decoding"""

    def test_decode_invalid_token(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_token("not.a.token")

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Not authorized to access this route"

    def test_decode_expired_token(self):
        token = create_access_token({"sub": "user123"}, expires_delta=timedelta(seconds=-10))

        with pytest.raises(HTTPException) as exc_info:
            decode_token(token)

        assert exc_info.value.status_code == 401

    def test_decode_token_wrong_secret(self):
        token = jwt.encode(
            {"sub": "user123", "type": "access"},
            "some-other-secret",
            algorithm=settings.JWT_ALGORITHM
        )

        with pytest.raises(HTTPException):
            decode_token(token)
