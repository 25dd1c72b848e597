"""
Editor form renderer — HTML edit controls generated from the field schema.

render_field() is the recursive walk: basic types → one control, array → one
card per element recursing into array_fields, object → fieldset recursing into
object_fields. Every control carries:
  id="f-<block>-<segments>"   unique DOM identity from the full path
  data-path='[...]'           JSON path relative to the block data
The admin page script turns user input into EditOp posts from these attributes.
"""
import json
import re
from html import escape
from typing import Any, Dict, List, Optional, Sequence

from ..core.schemas import ComponentDefinition, ComponentField, ContentBlock
from ..registry import REGISTRY, ComponentRegistry
from .defaults import safe_value
from .operations import FieldPath, Segment, can_add, can_remove

CATEGORY_LABELS = {
    "hero":        "Hero Sections",
    "content":     "Content Blocks",
    "media":       "Media & Gallery",
    "social":      "Social Proof",
    "business":    "Business Info",
    "interactive": "Interactive",
}

_UNSAFE_ID = re.compile(r"[^a-zA-Z0-9]")


def dom_id(block_id: str, path: Sequence[Segment]) -> str:
    parts = [block_id] + [str(s) for s in path]
    return "f-" + "-".join(_UNSAFE_ID.sub("_", p) for p in parts)


def _attr_json(obj: Any) -> str:
    return escape(json.dumps(obj), quote=True)


def _singular(label: str) -> str:
    return label[:-1] if label.endswith("s") else label


def _label(field: ComponentField, for_id: str) -> str:
    star = ' <span class="req">*</span>' if field.required else ""
    return f'<label for="{for_id}" class="field__label">{escape(field.label)}{star}</label>'


def _help(field: ComponentField) -> str:
    return f'<p class="field__help">{escape(field.description)}</p>' if field.description else ""


# ── Basic controls ──────────────────────────────────────────────────────────

def _control(field: ComponentField, value: Any, fid: str, path_attr: str, block_id: str,
             media_target: Optional[Dict[str, Any]]) -> str:
    common = f'id="{fid}" name="{fid}" data-block="{escape(block_id)}" data-path="{path_attr}" data-type="{field.type}"'
    required = " required" if field.required else ""
    placeholder = f' placeholder="{escape(field.placeholder)}"' if field.placeholder else ""
    t = field.type

    if t == "textarea":
        return f'<textarea {common} rows="3"{placeholder}{required}>{escape(value)}</textarea>'

    if t == "number":
        bounds = ""
        if field.min is not None:
            bounds += f' min="{field.min:g}"'
        if field.max is not None:
            bounds += f' max="{field.max:g}"'
        step = ' step="any"'
        return f'<input {common} type="number" value="{escape(str(value))}"{bounds}{step}{required}>'

    if t == "boolean":
        checked = " checked" if value else ""
        return (f'<div class="field__check"><input {common} type="checkbox"{checked}>'
                f'<label for="{fid}">{escape(field.label)}</label></div>')

    if t == "select":
        opts = ['<option value="">Select an option...</option>']
        for o in field.options:
            sel = " selected" if o.value == value else ""
            opts.append(f'<option value="{escape(o.value)}"{sel}>{escape(o.label)}</option>')
        return f'<select {common}{required}>{"".join(opts)}</select>'

    if t == "color":
        colour = escape(value or "#000000")
        return (f'<div class="field__color"><input {common} type="color" value="{colour}">'
                f'<input type="text" value="{colour}" placeholder="#000000" data-block="{escape(block_id)}" '
                f'data-path="{path_attr}" data-type="color"></div>')

    if t == "url":
        ph = escape(field.placeholder or "https://example.com")
        return f'<input {common} type="url" value="{escape(value)}" placeholder="{ph}"{required}>'

    if t == "image":
        preview = ""
        if value.strip():
            preview = f'<div class="field__preview"><img src="{escape(value)}" alt="Preview" onerror="this.style.display=\'none\'"></div>'
        return f"""<div class="field__image">
  <input {common} type="url" value="{escape(value)}" placeholder="https://example.com/image.jpg or click Browse"{required}>
  <button type="button" class="btn btn-media" data-block="{escape(block_id)}" data-media-target="{_attr_json(media_target)}">Browse Media</button>
</div>{preview}"""

    return f'<input {common} type="text" value="{escape(value)}"{placeholder}{required}>'


# ── Recursive walk ──────────────────────────────────────────────────────────

def render_field(field: ComponentField, value: Any, path: Sequence[Segment], block_id: str = "",
                 media_target: Optional[Dict[str, Any]] = None) -> str:
    """Edit UI for one field at path (relative to the block data)."""
    path = tuple(path)
    value = safe_value(field, value)
    if field.type == "array":
        return _render_array(field, value, path, block_id)
    if field.type == "object":
        return _render_object(field, value, path, block_id)

    fid = dom_id(block_id, path)
    target = media_target or {"kind": "field", "block_id": block_id, "path": list(path)}
    label = "" if field.type == "boolean" else _label(field, fid)
    help_ = "" if field.type == "boolean" else _help(field)
    control = _control(field, value, fid, _attr_json(list(path)), block_id, target)
    return f'<div class="field field--{field.type}">{label}{help_}{control}</div>'


def _render_array(field: ComponentField, items: List[Any], path: FieldPath, block_id: str) -> str:
    path_attr = _attr_json(list(path))
    b = escape(block_id)
    singular = escape(_singular(field.label))
    image_field = next((f for f in field.array_fields if f.type == "image"), None)

    buttons = ""
    if can_add(field, items):
        buttons = f'<button type="button" class="btn btn-add" data-block="{b}" data-path="{path_attr}" data-op="add">Add {singular}</button>'
        if image_field is not None:
            buttons += (f'<button type="button" class="btn btn-media" data-block="{b}" data-path="{path_attr}" '
                        f'data-op="add-media">Add from Media</button>')

    removable = can_remove(field, items)
    cards = []
    for i, item in enumerate(items):
        item = item if isinstance(item, dict) else {}
        inner = []
        for af in field.array_fields:
            child_path = path + (i, af.key)
            target = None
            if af.type == "image":
                target = {"kind": "array_item", "block_id": block_id, "array_path": list(path),
                          "index": i, "field_key": af.key}
            inner.append(render_field(af, item.get(af.key), child_path, block_id, target))

        controls = (
            f'<button type="button" class="btn btn-move" data-block="{b}" data-path="{path_attr}" data-op="move" '
            f'data-index="{i}" data-direction="up"{" disabled" if i == 0 else ""}>↑</button>'
            f'<button type="button" class="btn btn-move" data-block="{b}" data-path="{path_attr}" data-op="move" '
            f'data-index="{i}" data-direction="down"{" disabled" if i == len(items) - 1 else ""}>↓</button>'
        )
        if removable:
            controls += (f'<button type="button" class="btn btn-remove" data-block="{b}" data-path="{path_attr}" '
                         f'data-op="remove" data-index="{i}">Remove</button>')

        cards.append(f"""<div class="array__item" id="{dom_id(block_id, path + (i,))}">
  <div class="array__item-header"><h4><span class="array__num">{i + 1}</span>{singular} {i + 1}</h4><div>{controls}</div></div>
  {"".join(inner)}
</div>""")

    empty = ""
    if not items:
        empty = (f'<div class="array__empty">No {escape(field.label.lower())} added yet. '
                 f'Click the &quot;Add&quot; button above to create your first one.</div>')

    star = ' <span class="req">*</span>' if field.required else ""
    return f"""<div class="field field--array" id="{dom_id(block_id, path)}">
  <div class="array__header"><label class="field__label">{escape(field.label)}{star}</label><div>{buttons}</div></div>
  {_help(field)}
  <div class="array__items">{"".join(cards)}</div>{empty}
</div>"""


def _render_object(field: ComponentField, value: Dict[str, Any], path: FieldPath, block_id: str) -> str:
    inner = "".join(
        render_field(of, value.get(of.key), path + (of.key,), block_id)
        for of in field.object_fields
    )
    star = ' <span class="req">*</span>' if field.required else ""
    return f"""<fieldset class="field field--object" id="{dom_id(block_id, path)}">
  <legend class="field__label">{escape(field.label)}{star}</legend>
  {_help(field)}
  {inner}
</fieldset>"""


# ── Block-level forms ───────────────────────────────────────────────────────

def render_block_form(definition: ComponentDefinition, block: ContentBlock,
                      position: int = 0, total: int = 1) -> str:
    """Edit card for one block: header with move/remove, then every field in declared order."""
    b = escape(block.id)
    fields_html = "".join(
        render_field(f, block.data.get(f.key), (f.key,), block.id)
        for f in definition.fields
    )
    up_disabled = " disabled" if position == 0 else ""
    down_disabled = " disabled" if position >= total - 1 else ""
    return f"""<section class="block-editor" id="block-{b}" data-block="{b}">
  <div class="block-editor__header">
    <div><span class="block-editor__icon">{escape(definition.icon)}</span>
      <h3>{escape(definition.name)}</h3><p>{escape(definition.description)}</p></div>
    <div>
      <button type="button" class="btn btn-move" data-block-move="up" data-block="{b}"{up_disabled}>↑</button>
      <button type="button" class="btn btn-move" data-block-move="down" data-block="{b}"{down_disabled}>↓</button>
      <button type="button" class="btn btn-remove" data-block-remove="{b}">Remove</button>
    </div>
  </div>
  <div class="block-editor__fields">{fields_html}</div>
</section>"""


def render_unknown_block_form(block: ContentBlock) -> str:
    b = escape(block.id)
    return f"""<section class="block-editor block-editor--unknown" id="block-{b}" data-block="{b}">
  <p>Unknown component type: {escape(block.type)}</p>
  <button type="button" class="btn btn-remove" data-block-remove="{b}">Remove</button>
</section>"""


def render_blocks_form(blocks: List[ContentBlock], registry: ComponentRegistry = REGISTRY) -> str:
    parts = []
    for i, block in enumerate(blocks):
        definition = registry.lookup(block.type)
        if definition is None:
            parts.append(render_unknown_block_form(block))
        else:
            parts.append(render_block_form(definition, block, i, len(blocks)))
    if not parts:
        return '<div class="blocks__empty">No components yet. Use &quot;Add Component&quot; to start building the page.</div>'
    return "\n".join(parts)


def render_component_picker(registry: ComponentRegistry = REGISTRY) -> str:
    """Component selector grouped by category (filter buttons + one card per type)."""
    filters = ['<button type="button" class="picker__filter picker__filter--active" data-category="all">All Components</button>']
    for category in registry.categories():
        filters.append(
            f'<button type="button" class="picker__filter" data-category="{category}">'
            f'{escape(CATEGORY_LABELS.get(category, category))}</button>'
        )
    cards = "".join(
        f"""<button type="button" class="picker__card" data-add-block="{escape(d.type)}" data-category="{d.category}">
  <span class="picker__icon">{escape(d.icon)}</span><strong>{escape(d.name)}</strong><span>{escape(d.description)}</span>
</button>"""
        for d in registry
    )
    return f"""<div class="picker" id="component-picker" hidden>
  <div class="picker__filters">{"".join(filters)}</div>
  <div class="picker__grid">{cards}</div>
</div>"""
