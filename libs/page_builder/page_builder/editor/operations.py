"""
Field operations over a block's data, addressed by explicit paths.

A FieldPath is a tuple of segments: str for a field/object key, int for an
array index. ("features", 2, "title") is the title of the third feature.
All operations are copy-on-write: inputs are never mutated.
"""
import logging
from typing import Any, Dict, List, Literal, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field

from ..core.schemas import ComponentDefinition, ComponentField
from .defaults import coerce, new_array_item, safe_value

log = logging.getLogger(__name__)

Segment = Union[int, str]
FieldPath = Tuple[Segment, ...]


class FieldPathError(KeyError):
    """Path does not match the field schema."""

    def __str__(self) -> str:
        return self.args[0] if self.args else "invalid field path"


def as_path(segments: Sequence[Segment]) -> FieldPath:
    """Normalise JSON segments: digit strings become indices."""
    out = []
    for s in segments:
        if isinstance(s, str) and s.isdigit():
            out.append(int(s))
        else:
            out.append(s)
    return tuple(out)


# ── Array / object primitives ───────────────────────────────────────────────

def can_add(field: ComponentField, items: List[Any]) -> bool:
    return field.max is None or len(items) < field.max


def can_remove(field: ComponentField, items: List[Any]) -> bool:
    return field.min is None or len(items) > field.min


def array_add(field: ComponentField, items: List[Any]) -> List[Any]:
    """Append a fresh element; unchanged once max is reached."""
    items = list(items or [])
    if not can_add(field, items):
        log.debug("array_add %s: max=%s reached", field.key, field.max)
        return items
    items.append(new_array_item(field))
    return items


def array_remove(field: ComponentField, items: List[Any], index: int) -> List[Any]:
    """Drop the element at index; unchanged at min or for an out-of-range index."""
    items = list(items or [])
    if not can_remove(field, items):
        log.debug("array_remove %s: min=%s reached", field.key, field.min)
        return items
    if 0 <= index < len(items):
        del items[index]
    return items


def array_move(items: List[Any], index: int, direction: str) -> List[Any]:
    """Swap with the previous ("up") or next ("down") element; no-op at the ends."""
    items = list(items or [])
    target = index - 1 if direction == "up" else index + 1
    if not (0 <= index < len(items)) or not (0 <= target < len(items)):
        return items
    items[index], items[target] = items[target], items[index]
    return items


def object_merge(value: Any, key: str, new: Any) -> Dict[str, Any]:
    """Copy of value with key replaced; every sibling key kept as-is."""
    merged = dict(value) if isinstance(value, dict) else {}
    merged[key] = new
    return merged


# ── Paths ───────────────────────────────────────────────────────────────────

def resolve_field(fields: List[ComponentField], path: Sequence[Segment]) -> ComponentField:
    """Descriptor addressed by path. Raises FieldPathError when the path leaves the schema."""
    segs = as_path(path)
    if not segs:
        raise FieldPathError("empty path")

    schema = fields
    i = 0
    while True:
        key = segs[i]
        if not isinstance(key, str):
            raise FieldPathError(f"expected a field key at {list(segs[:i + 1])}")
        field = next((f for f in schema if f.key == key), None)
        if field is None:
            raise FieldPathError(f"unknown field {key!r} at {list(segs[:i + 1])}")
        i += 1
        if i == len(segs):
            return field

        if field.type == "array":
            if not isinstance(segs[i], int):
                raise FieldPathError(f"expected an index after array {key!r}")
            i += 1
            if i == len(segs):
                raise FieldPathError(f"path ends on an element of {key!r}, not a field")
            schema = field.array_fields
        elif field.type == "object":
            schema = field.object_fields
        else:
            raise FieldPathError(f"{key!r} is a {field.type} field and has no children")


def get_at(data: Any, path: Sequence[Segment]) -> Any:
    """Tolerant read: None as soon as a segment is missing or mistyped."""
    node = data
    for seg in as_path(path):
        if isinstance(seg, int):
            if not isinstance(node, list) or not (0 <= seg < len(node)):
                return None
            node = node[seg]
        else:
            if not isinstance(node, dict):
                return None
            node = node.get(seg)
    return node


def set_at(data: Any, path: Sequence[Segment], value: Any) -> Any:
    """Copy of data with value written at path. Missing mappings are created on the way."""
    segs = as_path(path)
    if not segs:
        return value
    head, rest = segs[0], segs[1:]
    if isinstance(head, int):
        items = list(data) if isinstance(data, list) else []
        if not (0 <= head < len(items)):
            raise FieldPathError(f"index {head} out of range ({len(items)} items)")
        items[head] = set_at(items[head], rest, value)
        return items
    current = data.get(head) if isinstance(data, dict) else None
    return object_merge(data, head, set_at(current, rest, value))


# ── Edit operations ─────────────────────────────────────────────────────────

class EditOp(BaseModel):
    """One change sent by the editor UI (the onChange of a rendered control)."""
    op: Literal["set", "add", "remove", "move"]
    path: List[Segment] = Field(..., min_length=1)
    value: Any = None
    index: Optional[int] = None
    direction: Literal["up", "down"] = "down"


def apply_field_op(definition: ComponentDefinition, data: Dict[str, Any], op: EditOp) -> Dict[str, Any]:
    """New block data with op applied. Raises FieldPathError for paths outside the schema."""
    path = as_path(op.path)
    field = resolve_field(definition.fields, path)
    data = data if isinstance(data, dict) else {}

    if op.op == "set":
        return set_at(data, path, coerce(field, op.value))

    if field.type != "array":
        raise FieldPathError(f"{op.op!r} needs an array field, {field.key!r} is {field.type}")

    items = safe_value(field, get_at(data, path))
    if op.op == "add":
        new_items = array_add(field, items)
    elif op.index is None:
        raise FieldPathError(f"{op.op!r} needs an index")
    elif op.op == "remove":
        new_items = array_remove(field, items, op.index)
    else:
        new_items = array_move(items, op.index, op.direction)
    return set_at(data, path, new_items)
