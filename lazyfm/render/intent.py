"""Declarative frame description derived from controller state.

``build_render_intent`` is side-effect free: it turns the cursor, listing,
mode, and status into rows to clear, lines to draw, and where the pointer
glyph and text cursor go. ``TerminalController.draw`` executes the result.
"""

from __future__ import annotations

import time
from dataclasses import dataclass

from ..ansi import clip_ansi_line, display_width, truncate_name, wrap_text
from ..engine.controller import ModeController, StatusMessage
from ..engine.modes import ConfirmAction, ConfirmPrompt, HelpView, LineEdit, LineEditKind
from ..model import Entry, EntryKind
from .help import HELP_FOOTER, HELP_TEXT

POINTER_GLYPH = ">"
RIGHT_ARROW = "\u2192"
DOWN_ARROW = "\u2193"
INFO_ROW = 2
PATH_ROW = 1
NAME_COL = 3
NAME_MAX_LEN = 30
SIZE_WIDTH = 6
SIZE_MIN_COLUMNS = NAME_COL + NAME_MAX_LEN + 2 + SIZE_WIDTH
TIME_MIN_COLUMNS = SIZE_MIN_COLUMNS + 2 + 16
EMPTY_LISTING_TEXT = "List is empty. Press h/Left to go back."

PATH_STYLE = "\033[1;38;5;81m"
DIRECTORY_STYLE = "\033[38;5;75m"
SYMLINK_STYLE = "\033[38;5;116m"
FILE_STYLE = "\033[38;5;252m"
SELECTED_STYLE = "\033[7m"
WARNING_STYLE = "\033[97;101m"
DIM_STYLE = "\033[2;38;5;250m"
RESET = "\033[0m"

_CONFIRM_TEXT = {
    ConfirmAction.EMPTY_TRASH: "Are you sure to empty the trash? (y/n)",
    ConfirmAction.QUIT: "Z",
}


@dataclass(frozen=True)
class DrawLine:
    """Text written at a 1-based ``(row, col)``; may contain SGR codes."""

    row: int
    col: int
    text: str


@dataclass(frozen=True)
class RenderIntent:
    clear_rows: tuple[int, ...]
    lines: tuple[DrawLine, ...]
    pointer_row: int | None = None
    text_cursor: tuple[int, int] | None = None

    def line_at(self, row: int) -> str:
        """Concatenate the text drawn on ``row`` (test and debugging helper)."""
        return "".join(line.text for line in sorted(self.lines, key=lambda item: item.col) if line.row == row)


def format_size(size: int | None) -> str:
    if size is None:
        return ""
    if size < 1_000:
        return f"{size}B"
    if size < 1_000_000:
        return f"{size // 1_000}KB"
    if size < 1_000_000_000:
        return f"{size // 1_000_000}MB"
    return f"{size // 1_000_000_000}GB"


def format_time(modified_time: float | None) -> str:
    if modified_time is None:
        return ""
    return time.strftime("%Y-%m-%d %H:%M", time.localtime(modified_time))


def _entry_style(entry: Entry) -> str:
    if entry.kind is EntryKind.DIRECTORY:
        return DIRECTORY_STYLE
    if entry.kind is EntryKind.SYMLINK:
        return SYMLINK_STYLE
    return FILE_STYLE


def format_entry_row(entry: Entry, columns: int) -> str:
    """Build the styled text of one entry row, starting at ``NAME_COL``."""
    name = truncate_name(entry.display_name, NAME_MAX_LEN)
    body = f"{_entry_style(entry)}{name}"
    if columns >= SIZE_MIN_COLUMNS:
        padding = " " * max(0, NAME_MAX_LEN - display_width(name))
        body += f"{RESET}{padding}  {DIM_STYLE}{format_size(entry.size):>{SIZE_WIDTH}}"
        if columns >= TIME_MIN_COLUMNS:
            body += f"  {format_time(entry.modified_time)}"
    if entry.selected:
        body = SELECTED_STYLE + body.replace(RESET, RESET + SELECTED_STYLE)
    return clip_ansi_line(body, max(0, columns - NAME_COL + 1)) + RESET


def _info_row(controller: ModeController, columns: int) -> tuple[DrawLine, tuple[int, int] | None]:
    """Return the info-row line and, while editing, the text cursor position."""
    mode = controller.mode
    if isinstance(mode, LineEdit):
        buffer = mode.buffer
        if mode.kind is LineEditKind.COMMAND:
            prefix = ":"
        else:
            prefix = f"{RIGHT_ARROW} "
        text_col = 2 + display_width(prefix + buffer.text[: buffer.cursor])
        return DrawLine(INFO_ROW, 2, clip_ansi_line(prefix + buffer.text, columns - 1)), (INFO_ROW, text_col)
    if isinstance(mode, ConfirmPrompt):
        return DrawLine(INFO_ROW, 1, _styled_status(_confirm_text(mode), True, columns)), None
    status: StatusMessage | None = controller.status
    if status is not None:
        return DrawLine(INFO_ROW, 1, _styled_status(status.text, status.is_warning, columns)), None
    return DrawLine(INFO_ROW, 2, DOWN_ARROW), None


def _confirm_text(prompt: ConfirmPrompt) -> str:
    if prompt.action is ConfirmAction.DELETE:
        if len(prompt.targets) == 1:
            return "Are you sure to delete this item? (y/n)"
        return f"Are you sure to delete {len(prompt.targets)} items? (y/n)"
    return _CONFIRM_TEXT[prompt.action]


def _styled_status(text: str, warning: bool, columns: int) -> str:
    clipped = clip_ansi_line(text, columns)
    if warning:
        return f"{WARNING_STYLE}{clipped}{RESET}"
    return clipped


def _help_intent(rows: int, columns: int) -> RenderIntent:
    body_rows = max(1, rows - 1)
    lines = wrap_text(HELP_TEXT, max(1, columns))
    if len(lines) > body_rows:
        lines = lines[: body_rows - 1] + [f"{SELECTED_STYLE}...{RESET}"]
    drawn = [DrawLine(idx + 1, 1, line + RESET) for idx, line in enumerate(lines)]
    drawn.append(DrawLine(rows, 1, clip_ansi_line(HELP_FOOTER, columns)))
    return RenderIntent(clear_rows=tuple(range(1, rows + 1)), lines=tuple(drawn))


def build_render_intent(controller: ModeController, columns: int) -> RenderIntent:
    """Derive the full frame for the controller's current state."""
    geometry = controller.geometry
    rows = geometry.rows
    if isinstance(controller.mode, HelpView):
        return _help_intent(rows, columns)

    lines: list[DrawLine] = [
        DrawLine(PATH_ROW, 1, f"{PATH_STYLE}{clip_ansi_line(str(controller.current_dir), columns)}{RESET}"),
    ]
    info_line, text_cursor = _info_row(controller, columns)
    lines.append(info_line)

    cursor = controller.cursor
    pointer_row: int | None = None
    if cursor.is_empty:
        lines.append(DrawLine(geometry.first_entry_row, 2, clip_ansi_line(EMPTY_LISTING_TEXT, columns - 1)))
    else:
        for idx in cursor.visible_range():
            row = geometry.row_for_offset(idx - cursor.skip)
            lines.append(DrawLine(row, NAME_COL, format_entry_row(controller.listing[idx], columns)))
        pointer_row = geometry.row_for_offset(cursor.screen_offset)

    return RenderIntent(
        clear_rows=tuple(range(1, rows + 1)),
        lines=tuple(lines),
        pointer_row=pointer_row,
        text_cursor=text_cursor,
    )
