"""
Pydantic schemas for the page builder.
Recursive structure: ComponentDefinition → ComponentField → (array_fields | object_fields) → ...

ContentBlock is the persisted instance: {id, type, data}.
"""
import random
import string
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

FieldType = Literal[
    "text", "textarea", "number", "boolean", "select",
    "color", "url", "image", "array", "object",
]

Category = Literal["hero", "content", "media", "social", "business", "interactive"]

# Types edited as plain strings
TEXT_LIKE_TYPES = ("text", "textarea", "url", "select", "color", "image")

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_block_id() -> str:
    """Short local id (9 base-36 chars) — stable across reorders, not globally unique."""
    return "".join(random.choice(_ID_ALPHABET) for _ in range(9))


class BlockType(str, Enum):
    """Closed set of block types with a registry entry."""
    HERO_BANNER        = "hero_banner"
    HERO_SPLIT         = "hero_split"
    FEATURE_GRID       = "feature_grid"
    TESTIMONIALS       = "testimonials"
    CTA_SECTION        = "cta_section"
    STATS_SECTION      = "stats_section"
    IMAGE_GALLERY      = "image_gallery"
    TEAM_PROFILES      = "team_profiles"
    CONTACT_SECTION    = "contact_section"
    FAQ_SECTION        = "faq_section"
    PROCESS_STEPS      = "process_steps"
    WHAT_WE_OFFER_CARD = "what_we_offer_card"


class FieldOption(BaseModel):
    label: str
    value: str


class ComponentField(BaseModel):
    """One editable property. Composite types carry their own child schema."""
    model_config = ConfigDict(populate_by_name=True)

    key: str
    label: str
    type: FieldType = "text"
    required: bool = False
    options: List[FieldOption] = Field(default_factory=list)
    placeholder: Optional[str] = None
    description: Optional[str] = None
    min: Optional[float] = None
    max: Optional[float] = None
    array_fields: List["ComponentField"] = Field(default_factory=list, alias="arrayFields")
    object_fields: List["ComponentField"] = Field(default_factory=list, alias="objectFields")

    @property
    def children(self) -> List["ComponentField"]:
        """Schema that applies to this field's value; basic types have none."""
        if self.type == "array":
            return self.array_fields
        if self.type == "object":
            return self.object_fields
        return []

    def child(self, key: str) -> Optional["ComponentField"]:
        for f in self.children:
            if f.key == key:
                return f
        return None


ComponentField.model_rebuild()


class ComponentDefinition(BaseModel):
    """Catalog entry: display metadata + default payload + ordered field schema."""
    model_config = ConfigDict(populate_by_name=True)

    type: str
    name: str
    description: str = ""
    category: Category = "content"
    icon: str = ""
    preview: str = ""
    default_data: Dict[str, Any] = Field(default_factory=dict, alias="defaultData")
    fields: List[ComponentField] = Field(default_factory=list)

    def field(self, key: str) -> Optional[ComponentField]:
        for f in self.fields:
            if f.key == key:
                return f
        return None

    def summary(self) -> Dict[str, Any]:
        """Catalog entry without the field schema (component picker)."""
        return {
            "type": self.type, "name": self.name, "description": self.description,
            "category": self.category, "icon": self.icon, "preview": self.preview,
        }


class ContentBlock(BaseModel):
    """Persisted block instance. Lenient on input: stored JSON may predate the schema."""
    id: str = Field(default_factory=generate_block_id)
    type: str
    data: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v: Union[str, int, None]) -> str:
        if v is None or v == "":
            return generate_block_id()
        return str(v)

    @field_validator("data", mode="before")
    @classmethod
    def _data_as_mapping(cls, v: Any) -> Dict[str, Any]:
        return v if isinstance(v, dict) else {}
