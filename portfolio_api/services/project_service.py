"""
Project service - CRUD with sanitized input, unique slugs and publish timestamps.
"""

import json
import logging
from datetime import datetime, timezone

from portfolio_api.cache.redis_client import cache_delete, cache_get, cache_set
from portfolio_api.core.exceptions import EmptyUpdateError
from portfolio_api.db.models.project import Project
from portfolio_api.db.repositories.project_repository import ProjectRepository
from portfolio_api.schemas.common import Pagination
from portfolio_api.schemas.project import ProjectCreate, ProjectListResponse, ProjectResponse, ProjectUpdate
from portfolio_api.utils.text import generate_slug, sanitize_required, sanitize_string

logger = logging.getLogger(__name__)

CACHE_PREFIX = "project:slug:"

REQUIRED_TEXT_FIELDS = ("title", "description", "content")
NULLABLE_FIELDS = ("featured_image", "project_url", "github_url")


def _cache_key(slug: str) -> str:
    return CACHE_PREFIX + slug


def _clean_optional(value: str | None) -> str | None:
    return sanitize_string(value) if value else None


def _clean_technologies(values: list[str]) -> list[str]:
    cleaned = (sanitize_string(v) for v in values)
    return [v for v in cleaned if v]


class ProjectService:
    def __init__(self, repo: ProjectRepository):
        self.repo = repo

    async def list_projects(
        self, *, published: bool | None, search: str | None, limit: int, offset: int
    ) -> ProjectListResponse:
        projects, total = await self.repo.list_projects(published=published, search=search, skip=offset, limit=limit)
        return ProjectListResponse(
            projects=[ProjectResponse.model_validate(p) for p in projects],
            pagination=Pagination.build(total, limit, offset),
        )

    async def get_published_by_slug(self, slug: str) -> ProjectResponse | None:
        cached = await cache_get(_cache_key(slug))
        if cached:
            return ProjectResponse(**json.loads(cached))
        project = await self.repo.get_by_slug(slug, published_only=True)
        if not project:
            return None
        resp = ProjectResponse.model_validate(project)
        await cache_set(_cache_key(slug), resp.model_dump(mode="json"))
        return resp

    async def get_by_id(self, project_id: int) -> ProjectResponse | None:
        project = await self.repo.get_by_id(project_id)
        return ProjectResponse.model_validate(project) if project else None

    async def create(self, data: ProjectCreate) -> ProjectResponse:
        title = sanitize_required(data.title, "title")
        project = Project(
            title=title,
            slug=await self.repo.unique_slug(generate_slug(title)),
            description=sanitize_required(data.description, "description"),
            content=sanitize_required(data.content, "content"),
            technologies=_clean_technologies(data.technologies),
            featured_image=_clean_optional(data.featured_image),
            project_url=_clean_optional(data.project_url),
            github_url=_clean_optional(data.github_url),
            published=data.published,
            published_at=datetime.now(timezone.utc) if data.published else None,
        )
        project = await self.repo.add(project)
        logger.info("Created project id=%s slug=%s published=%s", project.id, project.slug, project.published)
        return ProjectResponse.model_validate(project)

    async def update(self, project_id: int, data: ProjectUpdate) -> ProjectResponse | None:
        """Apply provided fields. Raises EmptyUpdateError when the body carries none."""
        changes = {
            k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None or k in NULLABLE_FIELDS
        }
        if not changes:
            raise EmptyUpdateError("At least one field must be provided for update")
        # Reject blank text before touching the row
        required = {
            field: sanitize_required(changes[field], field) for field in REQUIRED_TEXT_FIELDS if field in changes
        }
        project = await self.repo.get_by_id(project_id)
        if not project:
            return None
        old_slug = project.slug

        title = required.pop("title", None)
        if title is not None and title != project.title:
            project.title = title
            project.slug = await self.repo.unique_slug(generate_slug(title), exclude_id=project.id)
        for field, value in required.items():
            setattr(project, field, value)
        if "technologies" in changes:
            project.technologies = _clean_technologies(changes["technologies"])
        for field in NULLABLE_FIELDS:
            if field in changes:
                setattr(project, field, _clean_optional(changes[field]))
        if "published" in changes:
            published = changes["published"]
            if published and not project.published:
                project.published_at = datetime.now(timezone.utc)
            elif not published:
                project.published_at = None
            project.published = published

        project = await self.repo.save(project)
        await cache_delete(*{_cache_key(old_slug), _cache_key(project.slug)})
        logger.info("Updated project id=%s fields=%s", project.id, sorted(changes))
        return ProjectResponse.model_validate(project)

    async def delete(self, project_id: int) -> bool:
        project = await self.repo.get_by_id(project_id)
        if not project:
            return False
        slug = project.slug
        await self.repo.delete(project)
        await cache_delete(_cache_key(slug))
        logger.info("Deleted project id=%s slug=%s", project_id, slug)
        return True
