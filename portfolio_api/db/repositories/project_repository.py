"""
Project repository - listings with optional published filter and title/description search.
"""

from sqlalchemy import ColumnElement, or_

from portfolio_api.db.models.project import Project
from portfolio_api.db.repositories.base_repository import SluggedRepository, like_pattern


class ProjectRepository(SluggedRepository[Project]):
    def __init__(self, session):
        super().__init__(session, Project)

    async def list_projects(
        self,
        *,
        published: bool | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[Project], int]:
        conditions: list[ColumnElement[bool]] = []
        if published is not None:
            conditions.append(Project.published.is_(published))
        if search:
            pattern = like_pattern(search)
            conditions.append(
                or_(Project.title.ilike(pattern, escape="\\"), Project.description.ilike(pattern, escape="\\"))
            )
        return await self._page(
            conditions,
            [Project.created_at.desc(), Project.id.desc()],
            skip=skip,
            limit=limit,
        )
