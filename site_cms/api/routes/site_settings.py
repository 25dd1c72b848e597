"""
Site settings — global header, footer and metadata (opaque JSON per setting type).

GET /api/site-settings/{setting_type}   → stored data, or the type's defaults (also on store errors)
PUT /api/site-settings/{setting_type}   → upsert (body = the settings object)
"""
import copy
import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...database import db_get_setting, db_upsert_setting, get_db
from ...models import SettingType
from ..auth import check_token

log = logging.getLogger(__name__)
router = APIRouter(tags=["Site settings"])


# ── Defaults ───────────────────────────────────────────────────────────────────

DEFAULTS: Dict[str, Dict[str, Any]] = {
    SettingType.HEADER.value: {
        "logo": {"src": "/logo.png", "alt": "NaturesForce Contract Packing", "width": 140, "height": 35},
        "navigation": [
            {"label": "Home", "href": "/"},
            {"label": "About", "href": "/about"},
            {
                "label": "Services",
                "href": "/services",
                "children": [
                    {"label": "Contract Packing", "href": "/services/contract-packing"},
                    {"label": "Product Assembly", "href": "/services/assembly"},
                    {"label": "Quality Control", "href": "/services/quality"},
                ],
            },
            {"label": "Contact", "href": "/contact"},
        ],
        "cta": {"label": "Get Started", "href": "/contact", "style": "primary"},
    },
    SettingType.FOOTER.value: {
        "logo": {"src": "/logo.png", "alt": "NaturesForce Contract Packing", "width": 150, "height": 50},
        "description": "Professional contract packing services for your business needs.",
        "sections": [
            {
                "title": "Services",
                "links": [
                    {"label": "Contract Packing", "href": "/services/contract-packing"},
                    {"label": "Product Assembly", "href": "/services/assembly"},
                    {"label": "Quality Control", "href": "/services/quality"},
                    {"label": "Logistics", "href": "/services/logistics"},
                ],
            },
            {
                "title": "Company",
                "links": [
                    {"label": "About Us", "href": "/about"},
                    {"label": "Contact", "href": "/contact"},
                    {"label": "Careers", "href": "/careers"},
                    {"label": "News", "href": "/news"},
                ],
            },
        ],
        "socialLinks": [
            {"platform": "linkedin", "url": "https://linkedin.com/company/naturesforce"},
            {"platform": "twitter", "url": "https://twitter.com/naturesforce"},
        ],
        "bottomText": "Quality contract packing services since 2020",
        "copyright": "© 2024 NaturesForce Contract Packing. All rights reserved.",
    },
    SettingType.METADATA.value: {
        "title": "NaturesForce Contract Packing - Professional Packaging Services",
        "description": "Leading contract packing services provider offering professional packaging, "
                       "assembly, and logistics solutions for businesses across industries.",
        "keywords": "contract packing, packaging services, product assembly, logistics, quality control",
        "author": "NaturesForce Contract Packing",
        "robots": "index, follow",
        "openGraph": {
            "title": "NaturesForce Contract Packing",
            "description": "Professional contract packing services for your business needs",
            "type": "website",
            "locale": "en_US",
        },
    },
}


def load_setting(db: Session, setting_type: str) -> Dict[str, Any]:
    """Stored data for setting_type, or a copy of its defaults."""
    try:
        row = db_get_setting(db, setting_type)
    except SQLAlchemyError as e:
        log.error("Reading %s settings failed, serving defaults: %s", setting_type, e)
        row = None
    if row and isinstance(row.data, dict) and row.data:
        return row.data
    return copy.deepcopy(DEFAULTS[setting_type])


def _setting_type_or_404(setting_type: str) -> str:
    if setting_type not in DEFAULTS:
        raise HTTPException(404, f"Unknown setting type '{setting_type}'")
    return setting_type


@router.get("/api/site-settings/{setting_type}")
def get_setting(setting_type: str, db: Session = Depends(get_db)):
    setting_type = _setting_type_or_404(setting_type)
    return {"success": True, "setting_type": setting_type, "data": load_setting(db, setting_type)}


@router.put("/api/site-settings/{setting_type}")
def put_setting(setting_type: str, request: Request, data: Dict[str, Any] = Body(...),
                db: Session = Depends(get_db)):
    check_token(request)
    setting_type = _setting_type_or_404(setting_type)
    try:
        row = db_upsert_setting(db, setting_type, data)
    except SQLAlchemyError as e:
        db.rollback()
        log.error("Saving %s settings failed: %s", setting_type, e)
        raise HTTPException(500, f"Failed to update {setting_type} settings")
    log.info("Site settings updated: %s", setting_type)
    return {"success": True, "setting_type": setting_type, "data": row.data}
