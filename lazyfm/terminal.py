"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle, alternate-screen switching, and cursor visibility.
Also executes ``RenderIntent`` frames by emitting the escape sequences.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

from .render import POINTER_GLYPH, RenderIntent

BLINKING_BLOCK = "\x1b[1 q"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"


def move_to(row: int, col: int) -> str:
    return f"\x1b[{max(1, row)};{max(1, col)}H"


def frame_payload(intent: RenderIntent) -> str:
    """Translate one frame into the escape-sequence string that draws it."""
    out: list[str] = [HIDE_CURSOR]
    for row in intent.clear_rows:
        out.append(move_to(row, 1))
        out.append("\x1b[2K")
    for line in intent.lines:
        out.append(move_to(line.row, line.col))
        out.append(line.text)
    if intent.pointer_row is not None:
        out.append(move_to(intent.pointer_row, 1))
        out.append(POINTER_GLYPH)
    if intent.text_cursor is not None:
        row, col = intent.text_cursor
        out.append(move_to(row, col))
        out.append(SHOW_CURSOR)
        out.append(BLINKING_BLOCK)
    return "".join(out)


class TerminalController:
    """Manage terminal mode transitions and frame output."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Restore normal terminal state and the main screen buffer."""
        os.write(self.stdout_fd, b"\x1b[0 q\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def draw(self, intent: RenderIntent) -> None:
        os.write(self.stdout_fd, frame_payload(intent).encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
