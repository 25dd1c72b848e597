"""
Pages — CRUD on page records (content = ordered ContentBlock list).

GET    /api/pages
POST   /api/pages
GET    /api/pages/{page_id}
PUT    /api/pages/{page_id}
DELETE /api/pages/{page_id}     → 400 for the homepage
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ...database import (
    db_create_page, db_delete_page, db_get_page, db_get_page_by_slug,
    db_list_pages, db_update_page, get_db,
)
from ...models import PageDB, PageInput, PageUpdate
from ..auth import check_token

log = logging.getLogger(__name__)
router = APIRouter(tags=["Pages"])


def get_page_or_404(db: Session, page_id: str) -> PageDB:
    page = db_get_page(db, page_id)
    if not page:
        raise HTTPException(404, f"Page {page_id} not found")
    return page


def _check_slug_free(db: Session, slug: str, page_id: str = None):
    other = db_get_page_by_slug(db, slug)
    if other and other.id != page_id:
        raise HTTPException(409, f"Slug '{slug}' is already used by another page")


def create_page(db: Session, req: PageInput) -> PageDB:
    _check_slug_free(db, req.slug)
    page = db_create_page(db, PageDB(
        title=req.title,
        slug=req.slug,
        meta_title=req.meta_title,
        meta_description=req.meta_description,
        status=req.status.value,
        is_homepage=req.is_homepage,
        content=[b.model_dump() for b in req.content],
    ))
    log.info("Page created: %s (/%s)", page.id, page.slug)
    return page


def update_page(db: Session, page: PageDB, req: PageUpdate) -> PageDB:
    fields = req.model_dump(exclude_unset=True, exclude_none=True)
    if "slug" in fields:
        _check_slug_free(db, fields["slug"], page.id)
    if "status" in fields:
        fields["status"] = req.status.value
    if "content" in fields:
        fields["content"] = [b.model_dump() for b in req.content]
    page = db_update_page(db, page, fields)
    log.info("Page updated: %s (/%s)", page.id, page.slug)
    return page


@router.get("/api/pages")
def list_pages(request: Request, db: Session = Depends(get_db)):
    check_token(request)
    return {"pages": [p.to_dict() for p in db_list_pages(db)]}


@router.post("/api/pages", status_code=201)
def create_page_route(req: PageInput, request: Request, db: Session = Depends(get_db)):
    check_token(request)
    return {"success": True, "page": create_page(db, req).to_dict()}


@router.get("/api/pages/{page_id}")
def get_page(page_id: str, request: Request, db: Session = Depends(get_db)):
    check_token(request)
    return {"page": get_page_or_404(db, page_id).to_dict()}


@router.put("/api/pages/{page_id}")
def update_page_route(page_id: str, req: PageUpdate, request: Request, db: Session = Depends(get_db)):
    check_token(request)
    page = get_page_or_404(db, page_id)
    return {"success": True, "page": update_page(db, page, req).to_dict()}


@router.delete("/api/pages/{page_id}")
def delete_page(page_id: str, request: Request, db: Session = Depends(get_db)):
    check_token(request)
    page = get_page_or_404(db, page_id)
    if page.is_homepage:
        raise HTTPException(400, "Cannot delete the homepage")
    slug = page.slug
    db_delete_page(db, page)
    log.info("Page deleted: %s (/%s)", page_id, slug)
    return {"success": True, "deleted": page_id}
