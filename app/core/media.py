"""
Upload pre-validation and storage helpers for the media bucket.

Validation here only rejects obviously wrong input early. The storage
service stays the authority on what it accepts.
"""

import logging
import os
from uuid import uuid4

from supabase import Client

from app.core.config import settings
from app.core.errors import InvalidArgument, UpstreamFailure
from app.schemas.media import FileType

log = logging.getLogger(__name__)

IMAGE_CONTENT_TYPES = {"image/jpeg", "image/png", "image/webp"}

_FOLDERS = {
    FileType.VIDEO: "videos",
    FileType.IMAGE: "images",
}


def validate_upload(file_type: FileType, content_type: str | None, size: int) -> None:
    if size <= 0:
        raise InvalidArgument("File is empty")

    if file_type == FileType.VIDEO:
        if not content_type or not content_type.startswith("video/"):
            raise InvalidArgument("Please upload a valid video file")
        if size > settings.MAX_VIDEO_SIZE:
            raise InvalidArgument("Video size must be less than 100MB")
    else:
        if content_type not in IMAGE_CONTENT_TYPES:
            raise InvalidArgument(
                "Please upload a valid image file (JPEG, PNG, or WebP)"
            )
        if size > settings.MAX_IMAGE_SIZE:
            raise InvalidArgument("File size must be less than 5MB")


def build_file_path(file_type: FileType, file_name: str | None) -> str:
    """Unique object path, e.g. ``videos/3f2a...9c.mp4``."""
    ext = os.path.splitext(file_name or "")[1].lower()
    return f"{_FOLDERS[file_type]}/{uuid4().hex}{ext}"


def public_url(db: Client, file_path: str) -> str:
    return db.storage.from_(settings.MEDIA_BUCKET).get_public_url(file_path)


def create_upload_url(db: Client, file_path: str) -> dict:
    try:
        return db.storage.from_(settings.MEDIA_BUCKET).create_signed_upload_url(
            file_path
        )
    except Exception:
        log.exception("create_upload_url failed path=%s", file_path)
        raise UpstreamFailure("Failed to prepare upload")


def upload_file(db: Client, file_path: str, content: bytes, content_type: str) -> None:
    try:
        db.storage.from_(settings.MEDIA_BUCKET).upload(
            file_path,
            content,
            file_options={"content-type": content_type},
        )
    except Exception:
        log.exception("upload_file failed path=%s", file_path)
        raise UpstreamFailure("Failed to upload file")
