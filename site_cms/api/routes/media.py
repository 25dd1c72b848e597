"""
Media library API.

GET    /api/media                → assets, newest first
POST   /api/media/upload         → multipart (files[] or file), server-side upload to ImageKit
POST   /api/media                → register a browser-side ImageKit upload
DELETE /api/media/{media_id}     → best-effort blob delete, then row
GET    /api/imagekit/auth        → {token, expire, signature, publicKey, urlEndpoint}
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from sqlalchemy.orm import Session

from ... import imagekit, media
from ...database import db_get_media, db_list_media, get_db
from ...models import MediaRegister
from ..auth import check_token

log = logging.getLogger(__name__)
router = APIRouter(tags=["Media"])


def _asset_dict(asset) -> dict:
    d = asset.to_dict()
    d["url"] = media.public_url(asset)
    return d


@router.get("/api/media")
def list_media(request: Request, db: Session = Depends(get_db)):
    check_token(request)
    return {"media": [_asset_dict(a) for a in db_list_media(db)]}


@router.post("/api/media/upload")
def upload_media(
    request: Request,
    files: Optional[List[UploadFile]] = File(None),
    file: Optional[UploadFile] = File(None),
    alt_text: str = Form(""),
    db: Session = Depends(get_db),
):
    """Each file is uploaded independently; one failure does not roll back the others."""
    check_token(request)
    uploads = list(files or []) + ([file] if file else [])
    if not uploads:
        raise HTTPException(400, "No file provided")

    saved, errors = [], []
    for up in uploads:
        content = media.read_upload(up.file)
        try:
            asset = media.upload(db, content, up.filename or "", up.content_type or "", alt_text or None)
        except media.MediaError as e:
            errors.append({"filename": up.filename, "error": str(e), "status": e.status})
            continue
        saved.append(_asset_dict(asset))

    if not saved:
        status = max(e["status"] for e in errors)
        raise HTTPException(status, "; ".join(e["error"] for e in errors))
    return {"success": not errors, "media": saved, "errors": errors}


@router.post("/api/media", status_code=201)
def register_media(req: MediaRegister, request: Request, db: Session = Depends(get_db)):
    check_token(request)
    try:
        asset = media.register(db, req)
    except media.MediaError as e:
        raise HTTPException(e.status, str(e))
    return {"success": True, "media": _asset_dict(asset)}


@router.delete("/api/media/{media_id}")
def delete_media(media_id: str, request: Request, db: Session = Depends(get_db)):
    check_token(request)
    asset = db_get_media(db, media_id)
    if not asset:
        raise HTTPException(404, f"Media {media_id} not found")
    media.delete(db, asset)
    log.info("Media deleted: %s", media_id)
    return {"success": True, "deleted": media_id}


@router.get("/api/imagekit/auth")
def imagekit_auth(request: Request):
    check_token(request)
    try:
        params = imagekit.auth_parameters()
    except imagekit.ImageKitError as e:
        raise HTTPException(500, str(e))
    return {**params, **imagekit.client_config()}
