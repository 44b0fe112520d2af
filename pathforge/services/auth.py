"""
Password hashing and JWT issuance/verification.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from pathforge.core.config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

TOKEN_EXPIRED = "TOKEN_EXPIRED"


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Malformed stored hash
        logger.warning("Password verification failed: unrecognized hash format")
        return False


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign a short-lived access token.

    Args:
        data: Claims to embed. ``sub`` should identify the user.
        expires_delta: Lifetime override; defaults to ``settings.access_token_expire_minutes``.

    Returns:
        str: Encoded JWT.
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode = {**data, "iat": now, "exp": expire, "type": "access"}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verify signature and expiry.

    Returns the claims, ``{"error": "TOKEN_EXPIRED"}`` for an expired but otherwise
    valid token, or ``None`` for anything malformed or tampered with.
    """
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except ExpiredSignatureError:
        return {"error": TOKEN_EXPIRED}
    except JWTError as e:
        logger.debug(f"Token rejected: {e}")
        return None
