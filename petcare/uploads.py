"""Image upload validation and local disk storage.

Uploads are validated completely (size, declared MIME type, extension and the
type libmagic detects in the content) before anything is written, so a
rejected upload never leaves a file on disk or a row in the database. Stored
files are served statically from /uploads/<filename>.
"""

import logging
import os
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import magic
from fastapi import HTTPException, UploadFile

from . import config

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
}

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif"}

INVALID_TYPE_MESSAGE = "Only JPEG, PNG, and GIF images are allowed"


@dataclass
class ImageUpload:
    contents: bytes
    extension: str
    content_type: str


def get_upload_dir() -> Path:
    """Upload directory, created on first use"""
    upload_dir = Path(config.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    return upload_dir


def _max_size_label() -> str:
    return f"{config.MAX_FILE_SIZE / (1024 * 1024):g}MB"


async def read_image_upload(file: Optional[UploadFile]) -> Optional[ImageUpload]:
    """
    Read and validate an uploaded image without persisting it.

    Returns:
        ImageUpload, or None when no file was sent

    Raises:
        HTTPException: 400 for oversized, empty or non-image uploads
    """
    if file is None or not file.filename:
        return None

    filename = os.path.basename(file.filename)
    if filename != file.filename:
        logger.warning(f"Rejected upload with unsafe filename: '{file.filename}'")
        raise HTTPException(status_code=400, detail="Invalid filename")

    content_type = (file.content_type or "").lower()
    extension = os.path.splitext(filename)[1].lower()
    if content_type not in ALLOWED_IMAGE_TYPES or extension not in ALLOWED_EXTENSIONS:
        logger.warning(f"Rejected upload '{filename}' ({content_type or 'no content type'})")
        raise HTTPException(status_code=400, detail=INVALID_TYPE_MESSAGE)

    contents = await file.read(config.MAX_FILE_SIZE + 1)
    if len(contents) > config.MAX_FILE_SIZE:
        logger.warning(f"Rejected upload '{filename}': larger than {_max_size_label()}")
        raise HTTPException(
            status_code=400, detail=f"File too large. Maximum size is {_max_size_label()}."
        )
    if not contents:
        raise HTTPException(status_code=400, detail="Empty file")

    detected_type = magic.from_buffer(contents, mime=True)
    if detected_type not in ALLOWED_IMAGE_TYPES:
        logger.warning(
            f"Rejected upload '{filename}': detected {detected_type}, declared {content_type}"
        )
        raise HTTPException(status_code=400, detail=INVALID_TYPE_MESSAGE)

    return ImageUpload(contents=contents, extension=extension, content_type=content_type)


def save_upload(image: ImageUpload, fieldname: str = "photo") -> str:
    """Write a validated image to the upload directory and return its stored filename"""
    stored_name = f"{fieldname}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}{image.extension}"
    path = get_upload_dir() / stored_name
    path.write_bytes(image.contents)
    logger.info(f"Stored upload {stored_name} ({len(image.contents)} bytes)")
    return stored_name


def delete_upload(filename: Optional[str]) -> None:
    """Remove a stored file; a missing file is not an error"""
    if not filename:
        return
    path = get_upload_dir() / os.path.basename(filename)
    try:
        path.unlink(missing_ok=True)
        logger.info(f"Removed upload {filename}")
    except OSError as e:
        logger.error(f"Failed to remove upload {filename}: {e}")
