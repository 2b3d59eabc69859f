"""Shared schema pieces: pagination envelope and URL field validation."""

import math
from typing import Annotated
from urllib.parse import urlparse

from pydantic import AfterValidator, BaseModel

UPLOADS_PREFIX = "/uploads/"


class Pagination(BaseModel):
    total: int
    limit: int
    offset: int
    pages: int

    @classmethod
    def build(cls, total: int, limit: int, offset: int) -> "Pagination":
        return cls(total=total, limit=limit, offset=offset, pages=math.ceil(total / limit) if limit else 0)


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_http_url(value: str | None) -> str | None:
    """Accept absolute http(s) URLs; empty strings (unset form fields) become None."""
    value = _blank_to_none(value)
    if value is None:
        return None
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("must be a valid http(s) URL")
    return value


def validate_image_url(value: str | None) -> str | None:
    """Like validate_http_url, but also accepts paths returned by the upload endpoint."""
    value = _blank_to_none(value)
    if value is not None and value.startswith(UPLOADS_PREFIX) and ".." not in value:
        return value
    return validate_http_url(value)


HttpUrlStr = Annotated[str | None, AfterValidator(validate_http_url)]
ImageUrlStr = Annotated[str | None, AfterValidator(validate_image_url)]
