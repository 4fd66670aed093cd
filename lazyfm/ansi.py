"""Column-accurate measurement and shaping of styled terminal text.

Entry names and help lines carry SGR color codes; these helpers measure,
clip, and wrap such text by display columns while passing the escape
sequences through untouched.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Columns taken by ``ch`` when printed at visual column ``col``."""
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def _cells(text: str) -> Iterator[tuple[str, int]]:
    """Yield ``(chunk, width)`` pairs; escapes have width 0, tabs become spaces.

    Widths are computed as if ``text`` started at column 0.
    """
    col = 0
    pos = 0
    while pos < len(text):
        match = ANSI_ESCAPE_RE.match(text, pos) if text[pos] == "\x1b" else None
        if match is not None:
            yield match.group(0), 0
            pos = match.end()
            continue
        ch = text[pos]
        width = char_display_width(ch, col)
        yield (" " * width if ch == "\t" else ch), width
        col += width
        pos += 1


def display_width(text: str) -> int:
    return sum(width for _chunk, width in _cells(text))


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Keep at most ``max_cols`` columns of ``text``; a wide char never straddles the edge."""
    if max_cols <= 0:
        return ""
    out: list[str] = []
    used = 0
    for chunk, width in _cells(text):
        if used + width > max_cols:
            break
        out.append(chunk)
        used += width
    return "".join(out)


def truncate_name(name: str, max_cols: int) -> str:
    """Fit ``name`` into ``max_cols`` columns, marking cut names with ``~``."""
    if max_cols <= 0:
        return ""
    if display_width(name) <= max_cols:
        return name
    return clip_ansi_line(name, max_cols - 1) + "~"


def wrap_ansi_line(text: str, width: int) -> list[str]:
    """Break one styled line into rows of at most ``width`` columns."""
    if width <= 0:
        return [""]
    rows: list[str] = []
    current: list[str] = []
    used = 0
    for chunk, cells in _cells(text):
        if cells and used + cells > width and used > 0:
            rows.append("".join(current))
            current = []
            used = 0
        current.append(chunk)
        used += cells
    rows.append("".join(current))
    return rows


def wrap_text(text: str, width: int) -> list[str]:
    """Split ``text`` on newlines and wrap every line to ``width`` columns."""
    out: list[str] = []
    for line in text.splitlines():
        out.extend(wrap_ansi_line(line, width))
    return out
