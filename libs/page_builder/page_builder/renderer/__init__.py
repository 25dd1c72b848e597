from .html import (
    NO_CONTENT,
    not_implemented_placeholder,
    render_block,
    render_blocks,
    render_content,
    render_page,
    unknown_placeholder,
)
