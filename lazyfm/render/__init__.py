"""Frame derivation for the terminal driver."""

from .help import HELP_FOOTER, HELP_TEXT
from .intent import (
    POINTER_GLYPH,
    DrawLine,
    RenderIntent,
    build_render_intent,
    format_entry_row,
    format_size,
    format_time,
)

__all__ = [
    "HELP_FOOTER",
    "HELP_TEXT",
    "POINTER_GLYPH",
    "DrawLine",
    "RenderIntent",
    "build_render_intent",
    "format_entry_row",
    "format_size",
    "format_time",
]
