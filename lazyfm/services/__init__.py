"""External collaborators of the browser engine.

The engine only sees a ``BrowserServices`` record of callables. Default
implementations live in the submodules; tests swap in in-memory fakes.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from ..model import DirectoryListing, Entry, SortKey
from .clipboard import set_clipboard_text
from .fs_ops import FileOperations
from .launch import Launcher
from .naming import available_name, rename_dir, rename_file
from .scan import scan_directory


@dataclass(frozen=True)
class BrowserServices:
    """Injected side-effecting operations used by ``ModeController``.

    Every callable raises a ``LazyFmError`` subclass on failure.
    """

    scan: Callable[[Path, SortKey], DirectoryListing]
    delete: Callable[[Entry], None]
    paste: Callable[[Sequence[Entry], Path], list[Path]]
    rename: Callable[[Path, Path], None]
    mkdir: Callable[[Path], None]
    empty_trash: Callable[[], None]
    open_entry: Callable[[Entry], None]
    run_process: Callable[[str, list[str], Path], None]
    set_clipboard_text: Callable[[str], None]


def build_default_services(
    trash_dir: Path,
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
    extension_map: Mapping[str, str] | None = None,
    default_command: str | None = None,
) -> BrowserServices:
    """Wire filesystem, launcher, and clipboard implementations together."""
    file_ops = FileOperations(trash_dir)
    launcher = Launcher(
        disable_tui_mode,
        enable_tui_mode,
        extension_map=extension_map,
        default_command=default_command,
    )
    return BrowserServices(
        scan=scan_directory,
        delete=file_ops.delete,
        paste=file_ops.paste,
        rename=file_ops.rename,
        mkdir=file_ops.mkdir,
        empty_trash=file_ops.empty_trash,
        open_entry=launcher.open_entry,
        run_process=launcher.run_command,
        set_clipboard_text=set_clipboard_text,
    )


__all__ = [
    "BrowserServices",
    "build_default_services",
    "FileOperations",
    "Launcher",
    "available_name",
    "rename_dir",
    "rename_file",
    "scan_directory",
]
