"""
JWT access token helpers.
"""

from datetime import timedelta
from typing import Any, Dict, Optional

import jwt

from app.core.config import Settings
from app.utils.time import utc_now


def create_access_token(data: Dict[str, Any], settings: Settings) -> str:
    """
    Sign a bearer token carrying the given claims.

    An ``exp`` claim is added from ACCESS_TOKEN_EXPIRE_HOURS.
    """
    to_encode = dict(data)
    to_encode["exp"] = utc_now() + timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> Optional[Dict[str, Any]]:
    """
    Decode and verify a bearer token.

    Returns:
        The claims dict, or None if the token is invalid or expired
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.PyJWTError:
        return None
