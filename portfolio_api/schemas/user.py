"""User response schema - never exposes the password hash."""

from datetime import datetime

from pydantic import BaseModel


class UserResponse(BaseModel):
    id: int
    username: str
    email: str | None = None
    role: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
