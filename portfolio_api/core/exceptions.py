"""
Domain exceptions and their FastAPI handlers.
Endpoints raise HTTPException for auth/404; services raise the errors below.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from portfolio_api.config import get_settings

logger = logging.getLogger(__name__)


class BadRequestError(Exception):
    """Request is well-formed but cannot be applied. Mapped to 400."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmptyUpdateError(BadRequestError):
    """Update request carried no field that would change the record."""


class BlankFieldError(BadRequestError):
    """A required text field is empty once markup characters are stripped."""

    def __init__(self, field: str):
        super().__init__(f"{field.capitalize()} must not be empty")
        self.field = field


class InvalidUploadError(BadRequestError):
    """Uploaded file is missing, empty or not an accepted image type."""


class UploadTooLargeError(BadRequestError):
    status_code = status.HTTP_413_CONTENT_TOO_LARGE


def _field_name(loc: tuple) -> str:
    # ("body", "title") -> "title"; ("query", "limit") -> "limit"
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    return ".".join(parts) or str(loc[-1] if loc else "")


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [{"field": _field_name(tuple(err.get("loc", ()))), "message": err.get("msg", "")} for err in exc.errors()]
    logger.info("Validation failed on %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": errors},
    )


async def bad_request_handler(request: Request, exc: BadRequestError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Resource already exists"},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log with traceback, hide internals unless debug is on."""
    logger.error(
        "Unhandled exception in %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    content = {"detail": "Internal server error"}
    if get_settings().debug:
        content["error_type"] = type(exc).__name__
        content["error"] = str(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(BadRequestError, bad_request_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
