"""Persistent JSON config helpers.

Stores the initial sort key, delete confirmation, file openers, and the trash
location. All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir, user_log_dir

from .errors import FileSystemError
from .model import SortKey

APP_NAME = "lazyfm"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_TRASH_DIR = Path(user_data_dir(APP_NAME, appauthor=False)) / "trash"
LOG_DIR = Path(user_log_dir(APP_NAME, appauthor=False))


@dataclass(frozen=True)
class BrowserConfig:
    """Validated view of the persisted config."""

    sort_key: SortKey = SortKey.NAME
    warn_before_delete: bool = True
    default_command: str | None = None
    extension_map: dict[str, str] = field(default_factory=dict)
    trash_dir: Path = DEFAULT_TRASH_DIR


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _coerce_sort_key(value: object) -> SortKey:
    if isinstance(value, str):
        try:
            return SortKey(value.strip().lower())
        except ValueError:
            pass
    return SortKey.NAME


def _coerce_command(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def to_extension_map(value: object) -> dict[str, str]:
    """Flatten ``{command: [extensions]}`` into ``{extension: command}``.

    Extensions are lower-cased and may be written with or without a dot.
    Malformed entries are dropped.
    """
    if not isinstance(value, dict):
        return {}
    mapping: dict[str, str] = {}
    for command, extensions in value.items():
        command = _coerce_command(command)
        if command is None or not isinstance(extensions, list):
            continue
        for extension in extensions:
            if not isinstance(extension, str):
                continue
            normalized = extension.strip().lstrip(".").lower()
            if normalized:
                mapping[normalized] = command
    return mapping


def load_browser_config() -> BrowserConfig:
    data = load_config()
    warn = data.get("warn_before_delete")
    trash_dir = _coerce_command(data.get("trash_dir"))
    return BrowserConfig(
        sort_key=_coerce_sort_key(data.get("sort_key")),
        warn_before_delete=warn if isinstance(warn, bool) else True,
        default_command=_coerce_command(data.get("default")),
        extension_map=to_extension_map(data.get("exec")),
        trash_dir=Path(trash_dir).expanduser() if trash_dir else DEFAULT_TRASH_DIR,
    )


def save_sort_key(sort_key: SortKey) -> None:
    """Persist the sort key used for the next session."""
    config = load_config()
    config["sort_key"] = sort_key.value
    save_config(config)


def ensure_app_dirs(config: BrowserConfig) -> None:
    """Create the config and trash directories.

    Raises ``FileSystemError``; callers treat it as a fatal startup error.
    """
    for directory in (CONFIG_PATH.parent, config.trash_dir):
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileSystemError.from_os_error(exc, directory) from exc
