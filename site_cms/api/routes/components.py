"""
Component catalog for the editor UI.

GET /api/components                 → every definition (with field schema) + categories
GET /api/components/{type}          → one definition
"""
from typing import Optional

from fastapi import APIRouter, HTTPException

from page_builder.editor.form import CATEGORY_LABELS
from page_builder.registry import REGISTRY

router = APIRouter(tags=["Components"])


@router.get("/api/components")
def list_components(category: Optional[str] = None):
    definitions = REGISTRY.by_category(category) if category else REGISTRY.list_all()
    return {
        "components": [d.model_dump(by_alias=True) for d in definitions],
        "categories": [
            {"id": c, "label": CATEGORY_LABELS.get(c, c), "count": len(REGISTRY.by_category(c))}
            for c in REGISTRY.categories()
        ],
    }


@router.get("/api/components/{type_}")
def get_component(type_: str):
    definition = REGISTRY.lookup(type_)
    if definition is None:
        raise HTTPException(404, f"Unknown component type '{type_}'")
    return definition.model_dump(by_alias=True)
