from portfolio_api.db.models.blog_post import BlogPost
from portfolio_api.db.models.project import Project
from portfolio_api.db.models.user import ADMIN_ROLE, User

__all__ = ["ADMIN_ROLE", "BlogPost", "Project", "User"]
