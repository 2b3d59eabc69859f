"""
API router - aggregates the endpoint modules under /api, with a global rate limit.
"""

from fastapi import APIRouter, Depends

from portfolio_api.api.endpoints import auth, blog, projects
from portfolio_api.core.rate_limit import api_rate_limiter, auth_rate_limiter

api_router = APIRouter(dependencies=[Depends(api_rate_limiter)])

api_router.include_router(
    auth.router, prefix="/auth", tags=["auth"], dependencies=[Depends(auth_rate_limiter)]
)
api_router.include_router(blog.router, prefix="/blog", tags=["blog"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
