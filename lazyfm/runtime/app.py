"""Session bootstrap: wire config, services, terminal, and controller."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from ..config import BrowserConfig, save_sort_key
from ..engine.controller import ModeController
from ..errors import TooSmallViewportError
from ..services import build_default_services
from ..terminal import TerminalController
from .loop import default_terminal_size, run_main_loop

MIN_COLUMNS = 50
MIN_ROWS = 6

logger = logging.getLogger(__name__)


def check_terminal_size(columns: int, rows: int) -> None:
    if columns < MIN_COLUMNS or rows < MIN_ROWS:
        raise TooSmallViewportError(
            f"Terminal is too small ({columns}x{rows}); need at least {MIN_COLUMNS}x{MIN_ROWS}."
        )


def run_browser(
    path: Path,
    config: BrowserConfig,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> None:
    """Run one interactive session rooted at ``path``.

    Startup failures (too-small terminal, unreadable start directory) are
    raised before raw mode is entered.
    """
    stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    size = default_terminal_size()
    check_terminal_size(size.columns, size.lines)

    terminal = TerminalController(stdin_fd, stdout_fd)
    services = build_default_services(
        config.trash_dir,
        terminal.disable_tui_mode,
        terminal.enable_tui_mode,
        extension_map=config.extension_map,
        default_command=config.default_command,
    )
    controller = ModeController(
        path,
        services,
        rows=size.lines,
        sort_key=config.sort_key,
        warn_before_delete=config.warn_before_delete,
    )
    controller.load()
    logger.info("session started in %s (pid %d)", path, os.getpid())

    run_main_loop(controller, terminal, stdin_fd)
    if controller.sort_key is not config.sort_key:
        save_sort_key(controller.sort_key)
    logger.info("===END===")
