"""
Object storage adapter for profile images.

Uploads go to Cloudinary using the credentials from Settings. Files are sent
as base64 data URIs and only the resulting secure URL is kept by callers.
"""

from __future__ import annotations

import base64
import logging

import cloudinary
import cloudinary.uploader

from .config import get_settings

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 2 * 1024 * 1024
JPEG_MAGIC = b"\xFF\xD8\xFF"
PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


class ObjectStorageError(Exception):
    """Upload to object storage failed or storage is not configured."""


def has_valid_signature(data: bytes, content_type: str) -> bool:
    if content_type in {"image/jpeg", "image/jpg", "image/pjpeg"}:
        return data.startswith(JPEG_MAGIC)
    if content_type == "image/png":
        return data.startswith(PNG_MAGIC)
    return False


def to_data_uri(data: bytes, content_type: str) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


def upload_image(data: bytes, content_type: str) -> str:
    """Upload raw image bytes and return the storage's secure URL."""
    settings = get_settings()
    if not (settings.cloudinary_cloud_name and settings.cloudinary_api_key and settings.cloudinary_api_secret):
        raise ObjectStorageError("Object storage is not configured")
    cloudinary.config(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
        secure=True,
    )
    try:
        response = cloudinary.uploader.upload(
            to_data_uri(data, content_type),
            timeout=settings.cloudinary_timeout_seconds,
        )
    except Exception as exc:
        raise ObjectStorageError(f"Upload failed: {exc}") from exc
    url = (response or {}).get("secure_url")
    if not url:
        raise ObjectStorageError("Upload response has no secure_url")
    logger.info("Uploaded image to object storage", extra={"bytes": len(data)})
    return url
