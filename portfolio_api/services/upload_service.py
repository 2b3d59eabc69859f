"""
Image uploads for project/blog artwork. Files land in the upload dir and are served at /uploads.
"""

import logging
import secrets
import time
from pathlib import Path

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from portfolio_api.config import get_settings
from portfolio_api.core.exceptions import InvalidUploadError, UploadTooLargeError
from portfolio_api.schemas.project import UploadResponse

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


def upload_dir() -> Path:
    path = Path(get_settings().upload_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def _unique_filename(extension: str) -> str:
    return f"image-{int(time.time() * 1000)}-{secrets.token_hex(4)}{extension}"


async def save_image(file: UploadFile | None) -> UploadResponse:
    """Validate type and size, write to disk, return the public URL."""
    if file is None or not file.filename:
        raise InvalidUploadError("No file uploaded")
    extension = ALLOWED_IMAGE_TYPES.get(file.content_type or "")
    if extension is None:
        raise InvalidUploadError("Only JPEG, PNG, GIF and WebP images are allowed")

    max_bytes = get_settings().max_upload_bytes
    data = await file.read(max_bytes + 1)
    if not data:
        raise InvalidUploadError("Uploaded file is empty")
    if len(data) > max_bytes:
        raise UploadTooLargeError(f"File too large (max {max_bytes} bytes)")

    filename = _unique_filename(extension)
    target = upload_dir() / filename
    await run_in_threadpool(target.write_bytes, data)
    logger.info("Stored upload %s (%d bytes, %s)", filename, len(data), file.content_type)
    return UploadResponse(url=f"/uploads/{filename}", filename=filename)
