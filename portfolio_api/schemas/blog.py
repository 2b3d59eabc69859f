"""Blog post request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from portfolio_api.schemas.common import ImageUrlStr, Pagination


class BlogPostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    excerpt: str | None = Field(default=None, max_length=500)
    published: bool = False
    tags: list[str] = Field(default_factory=list)
    featured_image: ImageUrlStr = None
    read_time: str | None = Field(default=None, max_length=50)

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, value: list[str]) -> list[str]:
        return [t.strip() for t in value if t.strip()]


class BlogPostUpdate(BaseModel):
    """Partial update: only fields present in the request body are applied."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = Field(default=None, min_length=1)
    excerpt: str | None = Field(default=None, max_length=500)
    published: bool | None = None
    tags: list[str] | None = None
    featured_image: ImageUrlStr = None
    read_time: str | None = Field(default=None, max_length=50)

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        return [t.strip() for t in value if t.strip()]


class BlogPostSummary(BaseModel):
    """Public list item: no body, no draft bookkeeping."""

    id: int
    title: str
    slug: str
    excerpt: str | None = None
    author: str
    tags: list[str] = []
    featured_image: str | None = None
    read_time: str | None = None
    created_at: datetime | None = None
    published_at: datetime | None = None

    model_config = {"from_attributes": True}


class BlogPostResponse(BlogPostSummary):
    content: str
    published: bool
    updated_at: datetime | None = None


class BlogPostListResponse(BaseModel):
    posts: list[BlogPostSummary]
    pagination: Pagination


class AdminBlogPostListResponse(BaseModel):
    posts: list[BlogPostResponse]
    pagination: Pagination
