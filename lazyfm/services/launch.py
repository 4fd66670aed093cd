"""Child-process launches: opening files and running ``:`` commands.

Both run while the TUI is temporarily suspended so the child owns the
terminal, and both raise ``ProcessError`` instead of crashing the loop.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import sys
from collections.abc import Callable, Mapping
from pathlib import Path

from ..errors import ProcessError
from ..model import Entry

logger = logging.getLogger(__name__)


def platform_opener() -> list[str] | None:
    if sys.platform == "darwin":
        return ["open"]
    if os.name == "nt":
        return None
    if shutil.which("xdg-open") is not None:
        return ["xdg-open"]
    return None


def resolve_open_command(
    path: Path,
    extension_map: Mapping[str, str],
    default_command: str | None,
) -> list[str]:
    """Pick the command for ``path``: extension mapping, default, $EDITOR, OS opener."""
    extension = path.suffix[1:].lower()
    configured = extension_map.get(extension) if extension else None
    for candidate in (configured, default_command, os.environ.get("EDITOR", "").strip()):
        if candidate:
            cmd = shlex.split(candidate)
            if cmd:
                return cmd
    opener = platform_opener()
    if opener is None:
        raise ProcessError(f"No program configured to open {path.name}.")
    return opener


def _run_suspended(
    argv: list[str],
    cwd: Path,
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
) -> None:
    disable_tui_mode()
    try:
        completed = subprocess.run(argv, cwd=cwd, check=False)
    except OSError as exc:
        raise ProcessError(f"Failed to launch {argv[0]}: {exc.strerror or exc}") from exc
    finally:
        enable_tui_mode()
    if completed.returncode != 0:
        raise ProcessError(f"{argv[0]} exited with status {completed.returncode}.", completed.returncode)


class Launcher:
    """Runs external programs on behalf of the browser."""

    def __init__(
        self,
        disable_tui_mode: Callable[[], None],
        enable_tui_mode: Callable[[], None],
        extension_map: Mapping[str, str] | None = None,
        default_command: str | None = None,
    ) -> None:
        self.disable_tui_mode = disable_tui_mode
        self.enable_tui_mode = enable_tui_mode
        self.extension_map = dict(extension_map or {})
        self.default_command = default_command

    def open_entry(self, entry: Entry) -> None:
        cmd = resolve_open_command(entry.path, self.extension_map, self.default_command)
        logger.info("opening %s with %s", entry.path, cmd[0])
        _run_suspended([*cmd, str(entry.path)], entry.path.parent, self.disable_tui_mode, self.enable_tui_mode)

    def run_command(self, command: str, args: list[str], cwd: Path) -> None:
        logger.info("running %s %s in %s", command, " ".join(args), cwd)
        _run_suspended([command, *args], cwd, self.disable_tui_mode, self.enable_tui_mode)
