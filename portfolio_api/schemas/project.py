"""Project request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from portfolio_api.schemas.common import HttpUrlStr, ImageUrlStr, Pagination


class ProjectCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=500)
    content: str = Field(..., min_length=1)
    technologies: list[str] = Field(default_factory=list)
    featured_image: ImageUrlStr = None
    project_url: HttpUrlStr = None
    github_url: HttpUrlStr = None
    published: bool = False

    @field_validator("title", "description", "content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class ProjectUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1, max_length=500)
    content: str | None = Field(default=None, min_length=1)
    technologies: list[str] | None = None
    featured_image: ImageUrlStr = None
    project_url: HttpUrlStr = None
    github_url: HttpUrlStr = None
    published: bool | None = None

    @field_validator("title", "description", "content")
    @classmethod
    def not_blank(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("must not be blank")
        return value


class ProjectResponse(BaseModel):
    id: int
    title: str
    slug: str
    description: str
    content: str
    technologies: list[str] = []
    featured_image: str | None = None
    project_url: str | None = None
    github_url: str | None = None
    published: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
    published_at: datetime | None = None

    model_config = {"from_attributes": True}


class ProjectListResponse(BaseModel):
    projects: list[ProjectResponse]
    pagination: Pagination


class UploadResponse(BaseModel):
    url: str
    filename: str
