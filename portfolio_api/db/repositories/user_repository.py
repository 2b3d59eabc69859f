"""
User repository - lookups used by login and the admin bootstrap.
"""

from sqlalchemy import select

from portfolio_api.db.models.user import User
from portfolio_api.db.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, session):
        super().__init__(session, User)

    async def get_by_username(self, username: str) -> User | None:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()
