"""
Blog endpoints - public reading of published posts, admin CRUD under /admin.
Route order matters: /admin/* is declared before the catch-all /{slug}.
"""

from fastapi import APIRouter, HTTPException, Query, status

from portfolio_api.config import get_settings
from portfolio_api.core.dependencies import AdminUser
from portfolio_api.db.repositories.blog_post_repository import BlogPostRepository
from portfolio_api.db.session import DbSession
from portfolio_api.schemas.blog import (
    AdminBlogPostListResponse,
    BlogPostCreate,
    BlogPostListResponse,
    BlogPostResponse,
    BlogPostUpdate,
)
from portfolio_api.services.blog_service import BlogService

router = APIRouter()
settings = get_settings()


def _get_blog_service(session: DbSession) -> BlogService:
    return BlogService(BlogPostRepository(session))


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blog post not found")


@router.get("", response_model=BlogPostListResponse)
async def list_posts(
    session: DbSession,
    search: str | None = Query(None, max_length=200),
    tags: str | None = Query(None, max_length=100),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    offset: int = Query(0, ge=0),
):
    """Published posts. GET /api/blog?search=k8s&tags=devops&limit=10&offset=0."""
    return await _get_blog_service(session).list_published(search=search, tag=tags, limit=limit, offset=offset)


@router.get("/admin/posts", response_model=AdminBlogPostListResponse)
async def list_admin_posts(
    session: DbSession,
    admin: AdminUser,
    published: bool | None = Query(None),
    search: str | None = Query(None, max_length=200),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    offset: int = Query(0, ge=0),
):
    """All posts including drafts."""
    return await _get_blog_service(session).list_all(
        published=published, search=search, limit=limit, offset=offset
    )


@router.get("/admin/{post_id}", response_model=BlogPostResponse)
async def get_admin_post(session: DbSession, admin: AdminUser, post_id: int):
    post = await _get_blog_service(session).get_by_id(post_id)
    if not post:
        raise _not_found()
    return post


@router.post("/admin", response_model=BlogPostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(session: DbSession, admin: AdminUser, data: BlogPostCreate):
    """Create a post authored by the logged-in admin; slug derived from the title."""
    return await _get_blog_service(session).create(data, author=admin.username)


@router.put("/admin/{post_id}", response_model=BlogPostResponse)
async def update_post(session: DbSession, admin: AdminUser, post_id: int, data: BlogPostUpdate):
    post = await _get_blog_service(session).update(post_id, data)
    if not post:
        raise _not_found()
    return post


@router.delete("/admin/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(session: DbSession, admin: AdminUser, post_id: int):
    if not await _get_blog_service(session).delete(post_id):
        raise _not_found()


@router.get("/{slug}", response_model=BlogPostResponse)
async def get_post(session: DbSession, slug: str):
    """Single published post; drafts are 404 to the public."""
    post = await _get_blog_service(session).get_published_by_slug(slug)
    if not post:
        raise _not_found()
    return post
