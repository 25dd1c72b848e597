"""
Public site — published pages rendered through page_builder with the global header/footer.

GET /              → homepage (or a setup notice when none is published)
GET /{slug:path}   → published page, 404 otherwise
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from page_builder.renderer import render_page

from ...database import db_get_homepage, db_get_page_by_slug, get_db
from ...models import PageStatus, SettingType
from .site_settings import load_setting

log = logging.getLogger(__name__)
router = APIRouter(tags=["Public"])

_SETUP_NOTICE = """<!DOCTYPE html><html lang="en"><head><meta charset="UTF-8">
<title>NaturesForce</title></head><body style="font-family:sans-serif;text-align:center;padding:80px">
<h1>Welcome to NaturesForce</h1>
<p>No homepage has been published yet. Create a page in the admin and mark it as the homepage.</p>
</body></html>"""


def _render(db: Session, page) -> HTMLResponse:
    return HTMLResponse(render_page(
        page.to_dict(),
        header=load_setting(db, SettingType.HEADER.value),
        footer=load_setting(db, SettingType.FOOTER.value),
        metadata=load_setting(db, SettingType.METADATA.value),
    ))


@router.get("/", response_class=HTMLResponse)
def homepage(db: Session = Depends(get_db)):
    page = db_get_homepage(db)
    if not page or page.status != PageStatus.PUBLISHED.value:
        return HTMLResponse(_SETUP_NOTICE)
    return _render(db, page)


@router.get("/{slug:path}", response_class=HTMLResponse)
def public_page(slug: str, db: Session = Depends(get_db)):
    page = db_get_page_by_slug(db, slug.strip("/").lower())
    if not page or page.status != PageStatus.PUBLISHED.value:
        raise HTTPException(404, "Page not found")
    return _render(db, page)
