"""File logging bootstrap.

The terminal is in raw alternate-screen mode for the whole session, so log
records go to a timestamped file instead of stderr.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from .errors import FileSystemError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def init_log(log_dir: Path, level: int = logging.INFO) -> Path:
    """Attach a file handler to the ``lazyfm`` logger and return the log path."""
    log_path = log_dir / (time.strftime("%Y-%m-%d-%H-%M-%S") + ".log")
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError as exc:
        raise FileSystemError.from_os_error(exc, log_dir) from exc

    logger = logging.getLogger("lazyfm")
    for previous in list(logger.handlers):
        logger.removeHandler(previous)
        previous.close()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    logger.info("===START===")
    return log_path
