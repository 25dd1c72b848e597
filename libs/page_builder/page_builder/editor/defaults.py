"""
Type-appropriate defaults and input coercion for ComponentField values.

Nothing here raises on bad data: malformed values fall back to the field's
empty value so the editor keeps working on partially-initialised blocks.
"""
import math
from typing import Any, Dict

from ..core.schemas import TEXT_LIKE_TYPES, ComponentField

_TRUE_STRINGS = {"true", "on", "1", "yes", "checked"}


def empty_value(field: ComponentField) -> Any:
    """"" for text-like types, 0 for number, False for boolean, [] for array, {..} for object."""
    if field.type == "number":
        return 0
    if field.type == "boolean":
        return False
    if field.type == "array":
        return []
    if field.type == "object":
        return {f.key: empty_value(f) for f in field.object_fields}
    return ""


def new_array_item(field: ComponentField) -> Dict[str, Any]:
    """New element for an array field — exactly the keys of array_fields."""
    return {f.key: empty_value(f) for f in field.array_fields}


def _number(raw: Any) -> Any:
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, (int, float)):
        return 0 if isinstance(raw, float) and (math.isnan(raw) or math.isinf(raw)) else raw
    try:
        text = str(raw).strip()
        value = float(text)
    except (TypeError, ValueError):
        return 0
    if math.isnan(value) or math.isinf(value):
        return 0
    return int(value) if value.is_integer() and "." not in text else value


def coerce(field: ComponentField, raw: Any) -> Any:
    """Value as an input control of this field type would hand it over. min/max are not enforced here."""
    if field.type == "number":
        return _number(raw)
    if field.type == "boolean":
        if isinstance(raw, str):
            return raw.strip().lower() in _TRUE_STRINGS
        return bool(raw)
    if field.type == "array":
        return raw if isinstance(raw, list) else []
    if field.type == "object":
        return raw if isinstance(raw, dict) else empty_value(field)
    return "" if raw is None else str(raw)


def safe_value(field: ComponentField, value: Any) -> Any:
    """value when its shape fits the field type, else the empty value."""
    if field.type in TEXT_LIKE_TYPES:
        if isinstance(value, str):
            return value
        # numbers stored where a select/text is declared (e.g. columns: 3)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return ""
    if field.type == "number":
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return _number(value)
        return _number(value) if isinstance(value, str) and value.strip() else 0
    if field.type == "boolean":
        return value if isinstance(value, bool) else False
    if field.type == "array":
        return value if isinstance(value, list) else []
    if field.type == "object":
        return value if isinstance(value, dict) else empty_value(field)
    return value
