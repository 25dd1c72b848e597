"""
Data models — Page, MediaAsset, SiteSetting
SQLAlchemy 2.0 declarative + Pydantic v2 inputs
"""
import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

import sqlalchemy as sa
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from page_builder.core.schemas import ContentBlock


# ── ENUMS ──────────────────────────────────────────────────────────────

class PageStatus(str, Enum):
    DRAFT     = "draft"
    PUBLISHED = "published"


class SettingType(str, Enum):
    HEADER   = "header"
    FOOTER   = "footer"
    METADATA = "metadata"


# ── ORM ────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


def _uuid() -> str:
    return str(uuid.uuid4())


class PageDB(Base):
    __tablename__ = "pages"
    id:               Mapped[str]           = mapped_column(sa.String, primary_key=True, default=_uuid)
    title:            Mapped[str]           = mapped_column(sa.String, nullable=False)
    slug:             Mapped[str]           = mapped_column(sa.String, nullable=False, unique=True, index=True)
    meta_title:       Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    meta_description: Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)
    status:           Mapped[str]           = mapped_column(sa.String, default=PageStatus.DRAFT.value)
    is_homepage:      Mapped[bool]          = mapped_column(sa.Boolean, default=False)
    content:          Mapped[list]          = mapped_column(sa.JSON, default=list)
    created_at:       Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)
    updated_at:       Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "meta_title": self.meta_title or "",
            "meta_description": self.meta_description or "",
            "status": self.status,
            "is_homepage": bool(self.is_homepage),
            "content": self.content if isinstance(self.content, list) else [],
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


class MediaAssetDB(Base):
    __tablename__ = "media"
    id:               Mapped[str]           = mapped_column(sa.String, primary_key=True, default=_uuid)
    filename:         Mapped[str]           = mapped_column(sa.String, nullable=False)
    file_path:        Mapped[str]           = mapped_column(sa.String, nullable=False)
    file_size:        Mapped[int]           = mapped_column(sa.Integer, default=0)
    mime_type:        Mapped[str]           = mapped_column(sa.String, nullable=False)
    width:            Mapped[Optional[int]] = mapped_column(sa.Integer, nullable=True)
    height:           Mapped[Optional[int]] = mapped_column(sa.Integer, nullable=True)
    alt_text:         Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    imagekit_file_id: Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    created_at:       Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "filename": self.filename,
            "file_path": self.file_path,
            "file_size": self.file_size,
            "mime_type": self.mime_type,
            "width": self.width,
            "height": self.height,
            "alt_text": self.alt_text or "",
            "imagekit_file_id": self.imagekit_file_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class SiteSettingDB(Base):
    __tablename__ = "site_settings"
    setting_type: Mapped[str]      = mapped_column(sa.String, primary_key=True)
    data:         Mapped[dict]     = mapped_column(sa.JSON, default=dict)
    is_active:    Mapped[bool]     = mapped_column(sa.Boolean, default=True)
    updated_at:   Mapped[datetime] = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# ── PYDANTIC (API) ─────────────────────────────────────────────────────

class PageInput(BaseModel):
    title: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    meta_title: str = ""
    meta_description: str = ""
    status: PageStatus = PageStatus.DRAFT
    is_homepage: bool = False
    content: List[ContentBlock] = Field(default_factory=list)

    @field_validator("slug")
    @classmethod
    def _normalise_slug(cls, v: str) -> str:
        slug = v.strip().strip("/").lower()
        if not slug:
            raise ValueError("slug must not be empty")
        return slug


class PageUpdate(BaseModel):
    title: Optional[str] = None
    slug: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    status: Optional[PageStatus] = None
    is_homepage: Optional[bool] = None
    content: Optional[List[ContentBlock]] = None

    @field_validator("slug")
    @classmethod
    def _normalise_slug(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        slug = v.strip().strip("/").lower()
        if not slug:
            raise ValueError("slug must not be empty")
        return slug


class MediaRegister(BaseModel):
    """Metadata of a file already uploaded to ImageKit from the browser."""
    filename: str
    file_path: str
    file_size: int = 0
    mime_type: str
    width: Optional[int] = None
    height: Optional[int] = None
    alt_text: Optional[str] = None
    imagekit_file_id: Optional[str] = None
