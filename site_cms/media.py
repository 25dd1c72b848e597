"""
Media library — two-phase upload (blob on ImageKit, then metadata row) and best-effort delete.

A row write that fails after the blob upload leaves an orphan blob; it is logged with
its ImageKit file id and not reconciled.

file_path holds the ImageKit delivery URL; rows holding a bare path under the
endpoint still resolve through imagekit.url.
"""
import io
import logging
import os
from typing import Optional, Tuple

from PIL import Image
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import imagekit
from .database import db_create_media, db_delete_media
from .models import MediaAssetDB, MediaRegister

log = logging.getLogger(__name__)

ALLOWED_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")


class MediaError(Exception):
    """Upload/registration refused. status is the HTTP code the API answers with."""

    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.status = status


def max_file_bytes() -> int:
    return int(float(os.getenv("MEDIA_MAX_FILE_MB", "10")) * 1024 * 1024)


def validate_upload(filename: str, mime_type: str, size: int):
    if not filename:
        raise MediaError("No file provided")
    if mime_type not in ALLOWED_TYPES:
        raise MediaError(f"{filename}: unsupported file type {mime_type or 'unknown'}")
    if size > max_file_bytes():
        raise MediaError(f"{filename}: file is larger than {max_file_bytes() // (1024 * 1024)}MB")
    if size == 0:
        raise MediaError(f"{filename}: file is empty")


def read_upload(fileobj) -> bytes:
    """At most max_file_bytes() + 1 bytes, enough for validate_upload to refuse an oversize file."""
    return fileobj.read(max_file_bytes() + 1)


def image_size(content: bytes) -> Tuple[Optional[int], Optional[int]]:
    """(width, height) read with Pillow, (None, None) when the bytes are not a readable image."""
    try:
        with Image.open(io.BytesIO(content)) as img:
            return img.size
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        log.warning("Pillow could not read image size: %s", e)
        return None, None


def upload(db: Session, content: bytes, filename: str, mime_type: str,
           alt_text: Optional[str] = None) -> MediaAssetDB:
    """Validate, push the blob to ImageKit, then record it. Raises MediaError."""
    validate_upload(filename, mime_type, len(content))
    width, height = image_size(content)

    try:
        blob = imagekit.upload_file(content, filename, mime_type=mime_type)
    except imagekit.ImageKitError as e:
        raise MediaError(f"Failed to upload {filename}: {e}", status=502) from e

    try:
        return db_create_media(db, MediaAssetDB(
            filename=blob.get("name") or filename,
            file_path=blob.get("url") or blob.get("filePath") or "",
            file_size=blob.get("size") or len(content),
            mime_type=mime_type,
            width=blob.get("width") or width,
            height=blob.get("height") or height,
            alt_text=alt_text or "",
            imagekit_file_id=blob.get("fileId"),
        ))
    except SQLAlchemyError as e:
        db.rollback()
        log.error("Orphan blob %s (%s): metadata write failed: %s", blob.get("fileId"), filename, e)
        raise MediaError("Failed to save media to database", status=500) from e


def register(db: Session, meta: MediaRegister) -> MediaAssetDB:
    """Record a file the browser already uploaded to ImageKit."""
    if meta.mime_type not in ALLOWED_TYPES:
        raise MediaError(f"{meta.filename}: unsupported file type {meta.mime_type}")
    try:
        return db_create_media(db, MediaAssetDB(**meta.model_dump()))
    except SQLAlchemyError as e:
        db.rollback()
        log.error("Orphan blob %s (%s): metadata write failed: %s", meta.imagekit_file_id, meta.filename, e)
        raise MediaError("Failed to save media to database", status=500) from e


def delete(db: Session, asset: MediaAssetDB):
    """Blob delete is best-effort; the row always goes."""
    if asset.imagekit_file_id:
        try:
            imagekit.delete_file(asset.imagekit_file_id)
        except imagekit.ImageKitError as e:
            log.warning("Blob %s not deleted: %s", asset.imagekit_file_id, e)
    db_delete_media(db, asset)


def public_url(asset: MediaAssetDB) -> str:
    return imagekit.url(asset.file_path) if asset.file_path else ""
