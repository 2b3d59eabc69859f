"""
FastAPI auth dependencies: bearer token -> claims -> stored user -> admin check.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError

from portfolio_api.core.security import decode_access_token
from portfolio_api.db.models.user import User
from portfolio_api.db.repositories.user_repository import UserRepository
from portfolio_api.db.session import DbSession
from portfolio_api.schemas.auth import TokenPayload

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _invalid_token() -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid or expired token")


async def get_token_payload(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> TokenPayload:
    """Resolve the bearer JWT to its claims. 401 if missing, 403 if it does not verify."""
    if not credentials:
        raise _unauthorized("Not authenticated")
    payload = decode_access_token(credentials.credentials)
    if not payload or "sub" not in payload:
        raise _invalid_token()
    try:
        return TokenPayload(
            user_id=int(payload["sub"]),
            username=payload.get("username", ""),
            role=payload.get("role", ""),
        )
    except (ValueError, ValidationError):
        raise _invalid_token()


CurrentToken = Annotated[TokenPayload, Depends(get_token_payload)]


async def get_current_user(session: DbSession, token: CurrentToken) -> User:
    """Load the user behind the token. 404 if the account no longer exists."""
    user = await UserRepository(session).get_by_id(token.user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


async def require_admin(session: DbSession, token: CurrentToken) -> User:
    """Role check for content mutation against the stored role. A deleted account gets 403 too."""
    user = await UserRepository(session).get_by_id(token.user_id)
    if not user or not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user


AdminUser = Annotated[User, Depends(require_admin)]
