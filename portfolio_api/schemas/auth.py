"""Auth request/response schemas."""

from pydantic import BaseModel, Field

from portfolio_api.schemas.user import UserResponse


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    # bcrypt only looks at the first 72 bytes; reject longer input with a clear 400
    password: str = Field(..., min_length=6, max_length=72)


class TokenPayload(BaseModel):
    """Identity carried inside the JWT."""

    user_id: int
    username: str
    role: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class VerifyResponse(BaseModel):
    valid: bool = True
    user: TokenPayload
