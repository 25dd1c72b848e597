"""
Edit session — in-memory state of one page being edited.

Holds the page form, the ordered block list, the pending media-picker target
and the save lifecycle:

    idle → submitting → success | failed → idle

A failed save leaves every edit in place so the user can retry by hand.
"""
import copy
import logging
from enum import Enum
from typing import Annotated, Any, Callable, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from ..core.schemas import ComponentDefinition, ContentBlock, generate_block_id
from ..registry import REGISTRY, ComponentRegistry
from .defaults import empty_value, new_array_item, safe_value
from .operations import (
    EditOp, FieldPath, FieldPathError, Segment,
    apply_field_op, array_add, as_path, can_add, get_at, resolve_field, set_at,
)

log = logging.getLogger(__name__)


class SaveState(str, Enum):
    IDLE       = "idle"
    SUBMITTING = "submitting"
    SUCCESS    = "success"
    FAILED     = "failed"


class SaveInProgress(RuntimeError):
    """save() called while a previous save is still submitting."""


class PageForm(BaseModel):
    title: str = ""
    slug: str = ""
    meta_title: str = ""
    meta_description: str = ""
    status: Literal["draft", "published"] = "draft"
    is_homepage: bool = False


# ── Media picker target (tagged union) ──────────────────────────────────────

class NoTarget(BaseModel):
    kind: Literal["none"] = "none"


class FieldTarget(BaseModel):
    """Basic image field anywhere in a block."""
    kind: Literal["field"] = "field"
    block_id: str
    path: List[Segment]


class ArrayItemTarget(BaseModel):
    """Image field of one array element: array_path + (index, field_key)."""
    kind: Literal["array_item"] = "array_item"
    block_id: str
    array_path: List[Segment]
    index: int
    field_key: str


MediaTarget = Annotated[Union[NoTarget, FieldTarget, ArrayItemTarget], Field(discriminator="kind")]


class _TargetEnvelope(BaseModel):
    target: MediaTarget


def parse_media_target(raw: Dict[str, Any]) -> Union[NoTarget, FieldTarget, ArrayItemTarget]:
    return _TargetEnvelope(target=raw).target


# ── Session ─────────────────────────────────────────────────────────────────

class EditSession:
    """Editing state for one page. Not thread-safe; one session per editor tab."""

    def __init__(self, page_id: Optional[str] = None, page: Optional[PageForm] = None,
                 blocks: Optional[List[Any]] = None, registry: ComponentRegistry = REGISTRY):
        self.page_id = page_id
        self.page = page or PageForm()
        self.registry = registry
        self.blocks: List[ContentBlock] = []
        for raw in blocks or []:
            self._append_unique(self._as_block(raw))
        self.media_target: Union[NoTarget, FieldTarget, ArrayItemTarget] = NoTarget()
        self.save_state = SaveState.IDLE
        self.message = ""
        self.last_error: Optional[Exception] = None

    @staticmethod
    def _as_block(raw: Any) -> ContentBlock:
        if isinstance(raw, ContentBlock):
            return raw
        if isinstance(raw, dict):
            return ContentBlock.model_validate({
                "id": raw.get("id"),
                "type": str(raw.get("type") or ""),
                "data": raw.get("data"),
            })
        return ContentBlock(type="")

    # ── Blocks ──

    def _append_unique(self, block: ContentBlock) -> ContentBlock:
        """Append block, re-keying it when its id is already taken (stored pages may repeat ids)."""
        ids = {b.id for b in self.blocks}
        if block.id in ids:
            old = block.id
            while block.id in ids:
                block = block.model_copy(update={"id": generate_block_id()})
            log.warning("Duplicate block id %r re-keyed to %r", old, block.id)
        self.blocks.append(block)
        return block

    def block(self, block_id: str) -> Optional[ContentBlock]:
        return next((b for b in self.blocks if b.id == block_id), None)

    def _index(self, block_id: str) -> int:
        for i, b in enumerate(self.blocks):
            if b.id == block_id:
                return i
        return -1

    def _definition(self, block_id: str) -> ComponentDefinition:
        block = self.block(block_id)
        if block is None:
            raise KeyError(f"Block {block_id} not found")
        definition = self.registry.lookup(block.type)
        if definition is None:
            raise FieldPathError(f"Block {block_id} has unknown component type {block.type!r}")
        return definition

    def add_block(self, type_: str) -> Optional[ContentBlock]:
        """Append a block seeded from the definition's default data. None for an unknown type."""
        definition = self.registry.lookup(type_)
        if definition is None:
            log.warning("add_block: unknown component type %r", type_)
            return None
        return self._append_unique(ContentBlock(type=type_, data=copy.deepcopy(definition.default_data)))

    def remove_block(self, block_id: str) -> bool:
        i = self._index(block_id)
        if i == -1:
            return False
        del self.blocks[i]
        if self._target_block_id() == block_id:
            self.close_media_picker()
        return True

    def move_block(self, block_id: str, direction: str) -> bool:
        i = self._index(block_id)
        if i == -1:
            return False
        j = i - 1 if direction == "up" else i + 1
        if not (0 <= j < len(self.blocks)):
            return False
        self.blocks[i], self.blocks[j] = self.blocks[j], self.blocks[i]
        return True

    # ── Fields ──

    def apply(self, block_id: str, op: EditOp) -> ContentBlock:
        definition = self._definition(block_id)
        block = self.block(block_id)
        block.data = apply_field_op(definition, block.data, op)
        return block

    def update_field(self, block_id: str, path: FieldPath, value: Any) -> ContentBlock:
        return self.apply(block_id, EditOp(op="set", path=list(path), value=value))

    def value_at(self, block_id: str, path: FieldPath) -> Any:
        """Current value at path, defaulted by field type."""
        definition = self._definition(block_id)
        field = resolve_field(definition.fields, path)
        return safe_value(field, get_at(self.block(block_id).data, path))

    # ── Media picker ──

    def _target_block_id(self) -> Optional[str]:
        return getattr(self.media_target, "block_id", None)

    def open_media_picker(self, target: Union[NoTarget, FieldTarget, ArrayItemTarget]) -> None:
        """Remember where the next selected media URL goes. Rejects targets outside the schema."""
        if isinstance(target, FieldTarget):
            field = resolve_field(self._definition(target.block_id).fields, target.path)
            if field.type != "image":
                raise FieldPathError(f"{field.key!r} is not an image field")
        elif isinstance(target, ArrayItemTarget):
            definition = self._definition(target.block_id)
            array_field = resolve_field(definition.fields, target.array_path)
            child = array_field.child(target.field_key) if array_field.type == "array" else None
            if child is None or child.type != "image":
                raise FieldPathError(f"{target.field_key!r} is not an image field of {array_field.key!r}")
        self.media_target = target

    def add_item_from_media(self, block_id: str, array_path: FieldPath) -> Optional[ArrayItemTarget]:
        """Append an element to an image array and point the picker at its image field."""
        definition = self._definition(block_id)
        path = as_path(array_path)
        field = resolve_field(definition.fields, path)
        image = next((f for f in field.array_fields if f.type == "image"), None) if field.type == "array" else None
        if image is None:
            raise FieldPathError(f"{field.key!r} has no image field")
        block = self.block(block_id)
        items = safe_value(field, get_at(block.data, path))
        if not can_add(field, items):
            return None
        block.data = set_at(block.data, path, array_add(field, items))
        target = ArrayItemTarget(block_id=block_id, array_path=list(path), index=len(items), field_key=image.key)
        self.media_target = target
        return target

    def select_media(self, url: str) -> bool:
        """Write url into the pending target and clear it. False when nothing could be written."""
        target, self.media_target = self.media_target, NoTarget()
        if isinstance(target, NoTarget):
            return False
        block = self.block(target.block_id)
        if block is None:
            log.warning("select_media: block %s is gone", target.block_id)
            return False
        if isinstance(target, FieldTarget):
            block.data = set_at(block.data, as_path(target.path), url)
            return True
        items = get_at(block.data, target.array_path)
        if not isinstance(items, list) or not (0 <= target.index < len(items)):
            log.warning("select_media: element %s of %s is gone", target.index, target.array_path)
            return False
        path = as_path(target.array_path) + (target.index, target.field_key)
        if not isinstance(items[target.index], dict):
            array_field = resolve_field(self._definition(block.id).fields, target.array_path)
            block.data = set_at(block.data, as_path(target.array_path) + (target.index,), new_array_item(array_field))
        block.data = set_at(block.data, path, url)
        return True

    def close_media_picker(self) -> None:
        self.media_target = NoTarget()

    # ── Validation (advisory) ──

    def missing_required(self) -> List[Dict[str, Any]]:
        """Required fields left empty. Reported, never enforced."""
        out: List[Dict[str, Any]] = []
        for block in self.blocks:
            definition = self.registry.lookup(block.type)
            if definition is None:
                continue
            for field in definition.fields:
                self._collect_missing(block.id, field, block.data.get(field.key), (field.key,), out)
        return out

    def _collect_missing(self, block_id: str, field, value, path, out) -> None:
        value = safe_value(field, value)
        if field.type == "array":
            for i, item in enumerate(value):
                item = item if isinstance(item, dict) else {}
                for af in field.array_fields:
                    self._collect_missing(block_id, af, item.get(af.key), path + (i, af.key), out)
        elif field.type == "object":
            for of in field.object_fields:
                self._collect_missing(block_id, of, value.get(of.key), path + (of.key,), out)
        elif field.required and value == empty_value(field) and field.type != "boolean":
            out.append({"block_id": block_id, "path": list(path), "label": field.label})

    # ── Save lifecycle ──

    def content(self) -> List[Dict[str, Any]]:
        return [b.model_dump() for b in self.blocks]

    def save(self, persist: Callable[["EditSession"], str]) -> SaveState:
        """
        Run persist(self) and record the outcome.
        persist returns the saved page id; any exception it raises becomes the failure message.
        """
        if self.save_state == SaveState.SUBMITTING:
            raise SaveInProgress("A save is already in progress")
        self.save_state = SaveState.SUBMITTING
        self.message = ""
        self.last_error = None
        try:
            self.page_id = persist(self)
        except Exception as e:
            log.error("Save failed for page %s: %s", self.page_id or "<new>", e)
            self.save_state = SaveState.FAILED
            self.last_error = e
            self.message = str(e) or "Failed to save page"
            return self.save_state
        self.save_state = SaveState.SUCCESS
        self.message = "Page saved"
        return self.save_state

    def acknowledge(self) -> None:
        """Dismiss the last outcome message."""
        if self.save_state in (SaveState.SUCCESS, SaveState.FAILED):
            self.save_state = SaveState.IDLE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page_id": self.page_id,
            "page": self.page.model_dump(),
            "content": self.content(),
            "media_target": self.media_target.model_dump(),
            "save_state": self.save_state.value,
            "message": self.message,
        }
