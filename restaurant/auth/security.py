"""Password hashing (bcrypt) and bearer token issuance/verification (PyJWT)."""

import logging
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

from restaurant.settings import app_settings

logger = logging.getLogger(__name__)


def hash_password(password: str, rounds: int | None = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or app_settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(user_id: str, now: datetime | None = None) -> str:
    """Issue a signed token identifying the user."""
    now = now or datetime.now(UTC)
    claims = {
        "userId": user_id,
        "iat": now,
        "exp": now + timedelta(days=app_settings.jwt_expiration_days),
    }
    return jwt.encode(claims, app_settings.jwt_secret_key, algorithm=app_settings.jwt_algorithm)


def decode_access_token(token: str) -> str | None:
    """Return the user id carried by a valid token, or None."""
    try:
        payload = jwt.decode(token, app_settings.jwt_secret_key, algorithms=[app_settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        logger.info("Bearer token expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.info(f"Bearer token invalid: {e}")
        return None

    user_id = payload.get("userId")
    return user_id if isinstance(user_id, str) and user_id else None
