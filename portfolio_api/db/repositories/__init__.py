# Repository pattern: all SQL lives here, services stay storage-agnostic

from portfolio_api.db.repositories.blog_post_repository import BlogPostRepository
from portfolio_api.db.repositories.project_repository import ProjectRepository
from portfolio_api.db.repositories.user_repository import UserRepository

__all__ = ["BlogPostRepository", "ProjectRepository", "UserRepository"]
