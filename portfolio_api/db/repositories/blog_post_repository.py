"""
Blog post repository - public and admin listings with search, tag filter and pagination.
"""

import json

from sqlalchemy import ColumnElement, String, cast, or_

from portfolio_api.db.models.blog_post import BlogPost
from portfolio_api.db.repositories.base_repository import SluggedRepository, like_pattern


def _json_tag_pattern(tag: str) -> str:
    # Tags are a JSON array; match the encoded element, quotes included, so "go" never matches "golang"
    return like_pattern(json.dumps(tag))


class BlogPostRepository(SluggedRepository[BlogPost]):
    def __init__(self, session):
        super().__init__(session, BlogPost)

    async def list_published(
        self,
        *,
        search: str | None = None,
        tag: str | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[BlogPost], int]:
        """Published posts, newest publication first. Search covers title and excerpt."""
        conditions: list[ColumnElement[bool]] = [BlogPost.published.is_(True)]
        if search:
            pattern = like_pattern(search)
            conditions.append(
                or_(BlogPost.title.ilike(pattern, escape="\\"), BlogPost.excerpt.ilike(pattern, escape="\\"))
            )
        if tag:
            conditions.append(cast(BlogPost.tags, String).like(_json_tag_pattern(tag), escape="\\"))
        return await self._page(
            conditions,
            [BlogPost.published_at.desc(), BlogPost.created_at.desc(), BlogPost.id.desc()],
            skip=skip,
            limit=limit,
        )

    async def list_all(
        self,
        *,
        published: bool | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[BlogPost], int]:
        """Admin listing including drafts. Search covers title and content."""
        conditions: list[ColumnElement[bool]] = []
        if published is not None:
            conditions.append(BlogPost.published.is_(published))
        if search:
            pattern = like_pattern(search)
            conditions.append(
                or_(BlogPost.title.ilike(pattern, escape="\\"), BlogPost.content.ilike(pattern, escape="\\"))
            )
        return await self._page(
            conditions,
            [BlogPost.created_at.desc(), BlogPost.id.desc()],
            skip=skip,
            limit=limit,
        )
