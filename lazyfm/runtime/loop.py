"""Main interactive event loop for the terminal UI.

Single-threaded: one blocking key read per iteration, then dispatch to the
mode controller and redraw. The controller's cursor is the source of truth;
the terminal is only asked for its size.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable

from ..engine.controller import ModeController
from ..input import read_key
from ..render import build_render_intent
from ..terminal import TerminalController


def default_terminal_size() -> os.terminal_size:
    return shutil.get_terminal_size((80, 24))


def normalize_enter(key: str, skip_next_lf: bool) -> tuple[str | None, bool]:
    """Fold CR, LF, and CRLF into a single ``ENTER`` token.

    Returns ``(key, skip_next_lf)``; ``key`` is ``None`` when the byte is the
    LF half of a CRLF pair that was already reported.
    """
    if key == "ENTER_LF" and skip_next_lf:
        return None, False
    if key == "ENTER_CR":
        return "ENTER", True
    if key == "ENTER_LF":
        return "ENTER", False
    return key, False


def run_main_loop(
    controller: ModeController,
    terminal: TerminalController,
    stdin_fd: int,
    terminal_size: Callable[[], os.terminal_size] = default_terminal_size,
) -> None:
    """Run the interactive loop until the controller asks to quit or stdin closes."""
    skip_next_lf = False
    last_columns = -1
    with terminal.raw_mode():
        while True:
            term = terminal_size()
            controller.resize(term.lines)
            if term.columns != last_columns:
                last_columns = term.columns
                controller.dirty = True
            if controller.dirty:
                terminal.draw(build_render_intent(controller, term.columns))
                controller.dirty = False

            try:
                raw_key = read_key(stdin_fd)
            except KeyboardInterrupt:
                continue
            if raw_key == "":
                break
            key, skip_next_lf = normalize_enter(raw_key, skip_next_lf)
            if key is None:
                continue
            if controller.handle_key(key):
                break
