"""Command-line front door for lazyfm.

Parses CLI options, resolves the start directory, and sets up logging and
app directories. Then dispatches into the interactive browser runtime.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .config import LOG_DIR, ensure_app_dirs, load_browser_config
from .errors import LazyFmError
from .log import init_log
from .runtime import run_browser

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch the browser on a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used. A file argument starts the browser in its parent.
    """
    parser = argparse.ArgumentParser(description="Browse and manage files in a full-screen terminal UI.")
    parser.add_argument("path", nargs="?", default=None, help="Start directory. Defaults to current directory.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=LOG_LEVELS,
        type=str.upper,
        help="Minimum level written to the session log file.",
    )
    args = parser.parse_args()

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    if not path.exists():
        raise SystemExit(f"Invalid path: {path}")
    path = path.resolve()
    if not path.is_dir():
        path = path.parent

    config = load_browser_config()
    try:
        ensure_app_dirs(config)
        init_log(LOG_DIR, getattr(logging, args.log_level))
        run_browser(path, config)
    except LazyFmError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
