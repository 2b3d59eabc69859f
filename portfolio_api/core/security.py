"""
Passwords (bcrypt via passlib) and access tokens (HS256 JWT via python-jose).
Tokens carry the user id in `sub` plus `username` and `role` for the frontend.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from portfolio_api.config import get_settings
from portfolio_api.db.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=12)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def create_access_token(subject: str | int, extra: dict[str, Any] | None = None) -> str:
    """Sign a token for `subject` that expires after `jwt_expire_minutes`."""
    claims: dict[str, Any] = dict(extra or {})
    claims["sub"] = str(subject)
    claims["exp"] = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_expire_minutes)
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def create_user_token(user: User) -> str:
    return create_access_token(user.id, extra={"username": user.username, "role": user.role})


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Claims of a correctly signed, unexpired token; None for anything else."""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.info("Rejected access token: %s", e)
        return None
