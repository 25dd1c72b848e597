"""Database — engine + session + CRUD helpers (SQLite by default, DATABASE_URL for anything else)"""
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base, MediaAssetDB, PageDB, SiteSettingDB

log = logging.getLogger(__name__)

DATA_DIR = Path(os.getenv("DATA_DIR", str(Path(__file__).parent.parent / "data")))

DATABASE_URL = os.getenv("DATABASE_URL") or f"sqlite:///{DATA_DIR / 'naturesforce_cms.db'}"


def make_engine(url: str):
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True)


ENGINE       = make_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=ENGINE)


def init_db():
    if DATABASE_URL.startswith("sqlite"):
        DATA_DIR.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=ENGINE)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── Pages ──
def db_list_pages(db: Session) -> List[PageDB]:
    return db.query(PageDB).order_by(PageDB.is_homepage.desc(), PageDB.title).all()


def db_get_page(db: Session, page_id: str) -> Optional[PageDB]:
    return db.get(PageDB, page_id)


def db_get_page_by_slug(db: Session, slug: str) -> Optional[PageDB]:
    return db.query(PageDB).filter_by(slug=slug).first()


def db_get_homepage(db: Session) -> Optional[PageDB]:
    return db.query(PageDB).filter_by(is_homepage=True).first()


def db_clear_homepage(db: Session, keep_id: Optional[str] = None):
    """At most one homepage: unset the flag everywhere except keep_id (no commit)."""
    q = db.query(PageDB).filter(PageDB.is_homepage.is_(True))
    if keep_id:
        q = q.filter(PageDB.id != keep_id)
    for p in q.all():
        p.is_homepage = False


def db_create_page(db: Session, obj: PageDB) -> PageDB:
    if obj.is_homepage:
        db_clear_homepage(db)
    db.add(obj); db.commit(); db.refresh(obj); return obj


def db_update_page(db: Session, obj: PageDB, fields: Dict[str, Any]) -> PageDB:
    for k, v in fields.items():
        setattr(obj, k, v)
    if fields.get("is_homepage"):
        db_clear_homepage(db, keep_id=obj.id)
    db.commit(); db.refresh(obj); return obj


def db_delete_page(db: Session, obj: PageDB):
    db.delete(obj); db.commit()


# ── Media ──
def db_list_media(db: Session) -> List[MediaAssetDB]:
    return db.query(MediaAssetDB).order_by(MediaAssetDB.created_at.desc()).all()


def db_get_media(db: Session, media_id: str) -> Optional[MediaAssetDB]:
    return db.get(MediaAssetDB, media_id)


def db_create_media(db: Session, obj: MediaAssetDB) -> MediaAssetDB:
    db.add(obj); db.commit(); db.refresh(obj); return obj


def db_delete_media(db: Session, obj: MediaAssetDB):
    db.delete(obj); db.commit()


# ── Site settings ──
def db_get_setting(db: Session, setting_type: str) -> Optional[SiteSettingDB]:
    return db.query(SiteSettingDB).filter_by(setting_type=setting_type, is_active=True).first()


def db_upsert_setting(db: Session, setting_type: str, data: Dict[str, Any]) -> SiteSettingDB:
    existing = db.get(SiteSettingDB, setting_type)
    if existing:
        existing.data = data
        existing.is_active = True
    else:
        existing = SiteSettingDB(setting_type=setting_type, data=data, is_active=True)
        db.add(existing)
    db.commit(); db.refresh(existing); return existing
