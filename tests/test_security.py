"""Tests for password hashing and bearer tokens."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from restaurant.auth import create_access_token, decode_access_token, hash_password, verify_password
from restaurant.settings import app_settings


@pytest.mark.auth
class TestPasswords:
    def test_hash_verifies(self):
        hashed = hash_password("password123", rounds=4)

        assert hashed != "password123"
        assert verify_password("password123", hashed)
        assert not verify_password("wrong", hashed)

    def test_non_bcrypt_hash_never_verifies(self):
        assert not verify_password("anything", "!")


@pytest.mark.auth
class TestTokens:
    def test_round_trip_user_id(self):
        assert decode_access_token(create_access_token("user-1")) == "user-1"

    def test_expired_token(self):
        issued = datetime.now(UTC) - timedelta(days=app_settings.jwt_expiration_days + 1)

        assert decode_access_token(create_access_token("user-1", now=issued)) is None

    def test_wrong_signature(self):
        forged = jwt.encode({"userId": "user-1"}, "not-the-secret", algorithm="HS256")

        assert decode_access_token(forged) is None

    def test_missing_user_claim(self):
        token = jwt.encode({"sub": "user-1"}, app_settings.jwt_secret_key, algorithm=app_settings.jwt_algorithm)

        assert decode_access_token(token) is None

    def test_garbage(self):
        assert decode_access_token("not.a.token") is None
