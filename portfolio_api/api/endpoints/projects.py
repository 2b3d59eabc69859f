"""
Project endpoints - public portfolio listing, admin CRUD and image upload.
"""

from fastapi import APIRouter, File, HTTPException, Query, UploadFile, status

from portfolio_api.config import get_settings
from portfolio_api.core.dependencies import AdminUser
from portfolio_api.db.repositories.project_repository import ProjectRepository
from portfolio_api.db.session import DbSession
from portfolio_api.schemas.project import (
    ProjectCreate,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdate,
    UploadResponse,
)
from portfolio_api.services.project_service import ProjectService
from portfolio_api.services.upload_service import save_image

router = APIRouter()
settings = get_settings()


def _get_project_service(session: DbSession) -> ProjectService:
    return ProjectService(ProjectRepository(session))


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    session: DbSession,
    search: str | None = Query(None, max_length=200),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    offset: int = Query(0, ge=0),
):
    """Published projects only, newest first."""
    return await _get_project_service(session).list_projects(
        published=True, search=search, limit=limit, offset=offset
    )


@router.get("/admin", response_model=ProjectListResponse)
async def list_admin_projects(
    session: DbSession,
    admin: AdminUser,
    published: bool | None = Query(None),
    search: str | None = Query(None, max_length=200),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    offset: int = Query(0, ge=0),
):
    return await _get_project_service(session).list_projects(
        published=published, search=search, limit=limit, offset=offset
    )


@router.post("/admin/upload", response_model=UploadResponse)
async def upload_image(admin: AdminUser, image: UploadFile | None = File(None)):
    """Multipart upload (field `image`). Returns the /uploads URL to store as featured_image."""
    return await save_image(image)


@router.get("/admin/{project_id}", response_model=ProjectResponse)
async def get_admin_project(session: DbSession, admin: AdminUser, project_id: int):
    project = await _get_project_service(session).get_by_id(project_id)
    if not project:
        raise _not_found()
    return project


@router.post("/admin", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(session: DbSession, admin: AdminUser, data: ProjectCreate):
    return await _get_project_service(session).create(data)


@router.put("/admin/{project_id}", response_model=ProjectResponse)
async def update_project(session: DbSession, admin: AdminUser, project_id: int, data: ProjectUpdate):
    project = await _get_project_service(session).update(project_id, data)
    if not project:
        raise _not_found()
    return project


@router.delete("/admin/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(session: DbSession, admin: AdminUser, project_id: int):
    if not await _get_project_service(session).delete(project_id):
        raise _not_found()


@router.get("/{slug}", response_model=ProjectResponse)
async def get_project(session: DbSession, slug: str):
    project = await _get_project_service(session).get_published_by_slug(slug)
    if not project:
        raise _not_found()
    return project
