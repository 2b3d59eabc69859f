"""
Auth service - login (bcrypt check + JWT issue) and the idempotent admin bootstrap.
"""

import logging

from prometheus_client import Counter

from portfolio_api.core.security import create_user_token, hash_password, verify_password
from portfolio_api.db.models.user import ADMIN_ROLE, User
from portfolio_api.db.repositories.user_repository import UserRepository
from portfolio_api.schemas.auth import LoginRequest, LoginResponse
from portfolio_api.schemas.user import UserResponse
from portfolio_api.utils.text import sanitize_string

logger = logging.getLogger(__name__)

LOGIN_ATTEMPTS = Counter("portfolio_login_attempts_total", "Admin login attempts", ["outcome"])


class AuthService:
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def authenticate(self, data: LoginRequest) -> LoginResponse | None:
        """Return a token for valid credentials, None otherwise (unknown user and bad password look the same)."""
        username = sanitize_string(data.username)
        user = await self.user_repo.get_by_username(username)
        if not user or not verify_password(data.password, user.password_hash):
            LOGIN_ATTEMPTS.labels(outcome="failure").inc()
            logger.warning("Failed login for username=%r", username)
            return None
        token = create_user_token(user)
        LOGIN_ATTEMPTS.labels(outcome="success").inc()
        logger.info("User %s logged in", user.username)
        return LoginResponse(access_token=token, user=UserResponse.model_validate(user))

    async def ensure_admin(self, username: str, password: str, email: str | None = None) -> tuple[User, bool]:
        """Create the admin account if missing. Returns (user, created)."""
        existing = await self.user_repo.get_by_username(username)
        if existing:
            return existing, False
        user = User(
            username=username,
            password_hash=hash_password(password),
            email=email,
            role=ADMIN_ROLE,
        )
        user = await self.user_repo.add(user)
        logger.info("Created admin user %s", username)
        return user, True
