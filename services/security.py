"""
Password hashing and JWT helpers.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
import logging
import secrets

import bcrypt
from jose import jwt, JWTError

from app.config import settings

logger = logging.getLogger("nutriplan.security")

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


def _prepare_password(password: str) -> bytes:
    return password.encode("utf-8")[:MAX_PASSWORD_BYTES]


def hash_password(password: str) -> str:
    """Hash a password with bcrypt using the configured work factor."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_prepare_password(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against a stored hash; malformed hashes never match."""
    try:
        return bcrypt.checkpw(
            _prepare_password(plain_password), hashed_password.encode("utf-8")
        )
    except ValueError as e:
        logger.warning(f"password_verification_failed error={e}")
        return False


def create_access_token(
    user_id: int, email: str, role: str, expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a signed access token.

    Payload: ``sub`` (user id as string), ``email``, ``role``, ``exp``, ``iat``.
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_expires_minutes))
    payload = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "exp": expire,
        "iat": now,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and verify a token; returns None when invalid or expired."""
    try:
        return jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        return None


def generate_reset_token() -> str:
    """Random 32-byte token, hex encoded"""
    return secrets.token_hex(32)
