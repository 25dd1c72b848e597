"""Core module for page_builder."""
from .schemas import (
    BlockType,
    Category,
    ComponentDefinition,
    ComponentField,
    ContentBlock,
    FieldOption,
    FieldType,
    generate_block_id,
)

__all__ = [
    "BlockType",
    "Category",
    "ComponentDefinition",
    "ComponentField",
    "ContentBlock",
    "FieldOption",
    "FieldType",
    "generate_block_id",
]
