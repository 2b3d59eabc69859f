"""
User model - the single admin account (role gates content mutation).
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from portfolio_api.db.base import Base, TimestampMixin

ADMIN_ROLE = "admin"


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=ADMIN_ROLE)

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, role={self.role})>"
