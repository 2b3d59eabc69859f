"""
Blog service - post lifecycle: slugging, excerpt/read-time defaults, publish timestamps, cache.
"""

import json
import logging
from datetime import datetime, timezone

from portfolio_api.cache.redis_client import cache_delete, cache_get, cache_set
from portfolio_api.core.exceptions import EmptyUpdateError
from portfolio_api.db.models.blog_post import BlogPost
from portfolio_api.db.repositories.blog_post_repository import BlogPostRepository
from portfolio_api.schemas.blog import (
    AdminBlogPostListResponse,
    BlogPostCreate,
    BlogPostListResponse,
    BlogPostResponse,
    BlogPostSummary,
    BlogPostUpdate,
)
from portfolio_api.schemas.common import Pagination
from portfolio_api.utils.text import calculate_read_time, extract_excerpt, generate_slug, sanitize_required

logger = logging.getLogger(__name__)

CACHE_PREFIX = "blog:slug:"

# Explicit null is meaningful for these; for the rest it is ignored
NULLABLE_FIELDS = {"excerpt", "featured_image", "read_time"}


def _cache_key(slug: str) -> str:
    return CACHE_PREFIX + slug


class BlogService:
    def __init__(self, repo: BlogPostRepository):
        self.repo = repo

    async def list_published(
        self, *, search: str | None, tag: str | None, limit: int, offset: int
    ) -> BlogPostListResponse:
        posts, total = await self.repo.list_published(search=search, tag=tag, skip=offset, limit=limit)
        return BlogPostListResponse(
            posts=[BlogPostSummary.model_validate(p) for p in posts],
            pagination=Pagination.build(total, limit, offset),
        )

    async def list_all(
        self, *, published: bool | None, search: str | None, limit: int, offset: int
    ) -> AdminBlogPostListResponse:
        posts, total = await self.repo.list_all(published=published, search=search, skip=offset, limit=limit)
        return AdminBlogPostListResponse(
            posts=[BlogPostResponse.model_validate(p) for p in posts],
            pagination=Pagination.build(total, limit, offset),
        )

    async def get_published_by_slug(self, slug: str) -> BlogPostResponse | None:
        """Public detail. Served from Redis when cached; drafts are never returned."""
        cached = await cache_get(_cache_key(slug))
        if cached:
            return BlogPostResponse(**json.loads(cached))
        post = await self.repo.get_by_slug(slug, published_only=True)
        if not post:
            return None
        resp = BlogPostResponse.model_validate(post)
        await cache_set(_cache_key(slug), resp.model_dump(mode="json"))
        return resp

    async def get_by_id(self, post_id: int) -> BlogPostResponse | None:
        post = await self.repo.get_by_id(post_id)
        return BlogPostResponse.model_validate(post) if post else None

    async def create(self, data: BlogPostCreate, author: str) -> BlogPostResponse:
        title = sanitize_required(data.title, "title")
        slug = await self.repo.unique_slug(generate_slug(title))
        post = BlogPost(
            title=title,
            slug=slug,
            content=data.content,
            excerpt=data.excerpt or extract_excerpt(data.content),
            author=author,
            published=data.published,
            tags=data.tags,
            featured_image=data.featured_image,
            read_time=data.read_time or calculate_read_time(data.content),
            published_at=datetime.now(timezone.utc) if data.published else None,
        )
        post = await self.repo.add(post)
        logger.info("Created blog post id=%s slug=%s published=%s", post.id, post.slug, post.published)
        return BlogPostResponse.model_validate(post)

    async def update(self, post_id: int, data: BlogPostUpdate) -> BlogPostResponse | None:
        """Apply the fields present in the request. Raises EmptyUpdateError if nothing would change."""
        post = await self.repo.get_by_id(post_id)
        if not post:
            return None
        changes = {
            k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None or k in NULLABLE_FIELDS
        }
        old_slug = post.slug
        changed = False

        title = sanitize_required(changes["title"], "title") if "title" in changes else None
        if title is not None and title != post.title:
            post.title = title
            post.slug = await self.repo.unique_slug(generate_slug(post.title), exclude_id=post.id)
            changed = True

        if "content" in changes:
            post.content = changes["content"]
            if "read_time" not in changes:
                post.read_time = calculate_read_time(post.content)
            if "excerpt" not in changes:
                post.excerpt = extract_excerpt(post.content)
            changed = True

        for field in ("excerpt", "tags", "featured_image", "read_time"):
            if field in changes:
                setattr(post, field, changes[field])
                changed = True

        if "published" in changes:
            published = changes["published"]
            if published and not post.published:
                post.published_at = datetime.now(timezone.utc)
            elif not published:
                post.published_at = None
            post.published = published
            changed = True

        if not changed:
            raise EmptyUpdateError("No valid fields to update")

        post = await self.repo.save(post)
        await cache_delete(*{_cache_key(old_slug), _cache_key(post.slug)})
        logger.info("Updated blog post id=%s fields=%s", post.id, sorted(changes))
        return BlogPostResponse.model_validate(post)

    async def delete(self, post_id: int) -> bool:
        post = await self.repo.get_by_id(post_id)
        if not post:
            return False
        slug = post.slug
        await self.repo.delete(post)
        await cache_delete(_cache_key(slug))
        logger.info("Deleted blog post id=%s slug=%s", post_id, slug)
        return True
