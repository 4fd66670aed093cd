"""Clipboard writes through whichever platform tool is installed."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys

from ..errors import ProcessError

logger = logging.getLogger(__name__)


def clipboard_commands() -> list[list[str]]:
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if os.name == "nt":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


def set_clipboard_text(text: str) -> None:
    """Pipe ``text`` into the first clipboard tool that accepts it.

    Raises ``ProcessError`` when no tool is installed or every tool fails.
    """
    installed = [argv for argv in clipboard_commands() if shutil.which(argv[0]) is not None]
    for argv in installed:
        try:
            proc = subprocess.run(argv, input=text, text=True, capture_output=True, check=False)
        except OSError as exc:
            logger.debug("clipboard tool %s failed to start: %s", argv[0], exc)
            continue
        if proc.returncode == 0:
            return
        logger.debug("clipboard tool %s exited with %d", argv[0], proc.returncode)
    if not installed:
        raise ProcessError("Cannot access the clipboard: no clipboard tool found.")
    raise ProcessError("Cannot access the clipboard.")
