"""
page_builder — schema-driven component catalog, field editor and HTML renderer.

    from page_builder import REGISTRY, EditSession, render_content
"""
__version__ = "1.0.0"

from .core.schemas import BlockType, ComponentDefinition, ComponentField, ContentBlock, FieldOption
from .editor import EditOp, EditSession, FieldPathError, SaveInProgress, SaveState
from .registry import (
    COMPONENT_TYPES,
    REGISTRY,
    ComponentRegistry,
    get_all_categories,
    get_component_definition,
    get_components_by_category,
)
from .renderer import render_blocks, render_content, render_page
