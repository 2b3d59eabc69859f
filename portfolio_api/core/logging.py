"""
Logging setup: one console handler on the root logger, level from settings.
Also hosts the request logging middleware (method, path, status, duration).
"""

import logging
import sys
import time

from fastapi import Request

from portfolio_api.config import get_settings

_logging_configured = False

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging() -> None:
    """Configure root logging once. Safe to call from every create_app()."""
    global _logging_configured
    if _logging_configured:
        return
    _logging_configured = True

    settings = get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(console)

    # SQL echo is noisy at INFO; only show it in debug mode
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.debug else logging.WARNING)

    logging.getLogger("portfolio_api").info(
        "Logging configured: level=%s environment=%s", settings.log_level, settings.environment
    )


access_logger = logging.getLogger("portfolio_api.access")


async def log_requests(request: Request, call_next):
    """HTTP middleware: one access log line per request."""
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        duration_ms = (time.perf_counter() - start) * 1000
        access_logger.error("%s %s -> 500 (%.1f ms)", request.method, request.url.path, duration_ms)
        raise
    duration_ms = (time.perf_counter() - start) * 1000
    access_logger.info(
        "%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, duration_ms
    )
    return response
