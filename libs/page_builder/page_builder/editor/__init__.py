"""Schema-driven field editor: defaults, path operations, HTML form and edit session."""
from .defaults import coerce, empty_value, new_array_item, safe_value
from .form import render_block_form, render_blocks_form, render_component_picker, render_field
from .operations import (
    EditOp, FieldPath, FieldPathError,
    apply_field_op, array_add, array_move, array_remove, as_path,
    can_add, can_remove, get_at, object_merge, resolve_field, set_at,
)
from .session import (
    ArrayItemTarget, EditSession, FieldTarget, MediaTarget, NoTarget,
    PageForm, SaveInProgress, SaveState, parse_media_target,
)
