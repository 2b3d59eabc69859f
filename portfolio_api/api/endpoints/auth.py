"""
Auth endpoints - login, token verification, profile.
"""

from fastapi import APIRouter, HTTPException, status

from portfolio_api.core.dependencies import CurrentToken, CurrentUser
from portfolio_api.db.repositories.user_repository import UserRepository
from portfolio_api.db.session import DbSession
from portfolio_api.schemas.auth import LoginRequest, LoginResponse, VerifyResponse
from portfolio_api.schemas.user import UserResponse
from portfolio_api.services.auth_service import AuthService

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(session: DbSession, data: LoginRequest):
    """Authenticate with username/password and return a bearer JWT."""
    result = await AuthService(UserRepository(session)).authenticate(data)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    return result


@router.post("/verify", response_model=VerifyResponse)
async def verify(token: CurrentToken):
    """Token is valid if we got here; echo its claims."""
    return VerifyResponse(user=token)


@router.get("/profile", response_model=UserResponse)
async def profile(user: CurrentUser):
    return UserResponse.model_validate(user)
