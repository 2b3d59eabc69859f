"""
Base repositories - generic CRUD plus the slug lookups shared by posts and projects.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_api.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


def like_pattern(term: str) -> str:
    """Substring pattern for LIKE/ILIKE with wildcards in the term escaped (escape char: backslash)."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class BaseRepository(Generic[ModelType]):
    """Generic async repository. Subclasses define model-specific methods."""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    async def get_by_id(self, id: int) -> ModelType | None:
        result = await self.session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def add(self, entity: ModelType) -> ModelType:
        """Persist new entity. Caller commits session."""
        self.session.add(entity)
        await self.session.flush()  # Get ID and server defaults without committing
        await self.session.refresh(entity)
        return entity

    async def save(self, entity: ModelType) -> ModelType:
        """Flush pending changes on an already-tracked entity and reload server-side columns."""
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: ModelType) -> None:
        await self.session.delete(entity)
        await self.session.flush()

    async def _page(
        self,
        conditions: list[ColumnElement[bool]],
        order_by: list[Any],
        *,
        skip: int,
        limit: int,
    ) -> tuple[list[ModelType], int]:
        """Run a filtered, ordered page query and the matching count query."""
        stmt: Select = select(self.model).where(*conditions).order_by(*order_by).offset(skip).limit(limit)
        rows = await self.session.execute(stmt)
        count = await self.session.execute(select(func.count(self.model.id)).where(*conditions))
        return list(rows.scalars().all()), int(count.scalar_one())


class SluggedRepository(BaseRepository[ModelType]):
    """Repository for models with a unique `slug` and a `published` flag."""

    async def get_by_slug(self, slug: str, *, published_only: bool = False) -> ModelType | None:
        stmt = select(self.model).where(self.model.slug == slug)
        if published_only:
            stmt = stmt.where(self.model.published.is_(True))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str, *, exclude_id: int | None = None) -> bool:
        stmt = select(self.model.id).where(self.model.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.first() is not None

    async def unique_slug(self, base_slug: str, *, exclude_id: int | None = None) -> str:
        """First free slug among base, base-1, base-2, ..."""
        slug = base_slug
        counter = 1
        while await self.slug_exists(slug, exclude_id=exclude_id):
            slug = f"{base_slug}-{counter}"
            counter += 1
        return slug
