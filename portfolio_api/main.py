"""
FastAPI application entry point.
Mounts routes, middleware (CORS, access log, Prometheus), static uploads and error handlers.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from prometheus_client import make_asgi_app

from portfolio_api import __version__
from portfolio_api.api.endpoints import health
from portfolio_api.api.router import api_router
from portfolio_api.cache.redis_client import close_redis
from portfolio_api.config import get_settings
from portfolio_api.core.exceptions import setup_exception_handlers
from portfolio_api.core.logging import log_requests, setup_logging
from portfolio_api.db.session import engine
from portfolio_api.services.upload_service import upload_dir

logger = logging.getLogger(__name__)

# Baseline hardening headers; CORP is cross-origin so other sites can embed /uploads images
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "cross-origin",
}


async def security_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info("Starting %s v%s (environment=%s)", settings.app_name, __version__, settings.environment)
    if settings.secret_key == "change-me-in-production" and settings.environment == "production":
        logger.warning("SECRET_KEY is the default value; set a real secret (scripts/generate_jwt_secret.py)")
    yield
    await close_redis()
    await engine.dispose()
    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    setup_logging()
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Portfolio website backend: blog posts, projects and single-admin JWT auth.",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.middleware("http")(log_requests)
    app.middleware("http")(security_headers)
    setup_exception_handlers(app)

    # Prometheus metrics at /metrics
    app.mount("/metrics", make_asgi_app())

    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(api_router, prefix="/api")

    # Uploaded images
    app.mount("/uploads", StaticFiles(directory=str(upload_dir())), name="uploads")

    @app.get("/", tags=["meta"])
    async def root():
        return {
            "message": settings.app_name,
            "version": __version__,
            "endpoints": {
                "health": "/health",
                "auth": "/api/auth",
                "blog": "/api/blog",
                "projects": "/api/projects",
                "docs": "/docs",
            },
        }

    return app


app = create_app()
