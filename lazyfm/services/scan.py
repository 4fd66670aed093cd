"""Directory scanning into ordered ``DirectoryListing`` values."""

from __future__ import annotations

import os
from pathlib import Path

from ..errors import FileSystemError
from ..model import DirectoryListing, Entry, EntryKind, SortKey


def _entry_kind(child: os.DirEntry) -> EntryKind:
    try:
        if child.is_symlink():
            return EntryKind.SYMLINK
        if child.is_dir(follow_symlinks=False):
            return EntryKind.DIRECTORY
    except OSError:
        pass
    return EntryKind.FILE


def _sort_entries(entries: list[Entry], sort_key: SortKey) -> None:
    """Directories first, then files; by name or newest-modified first."""
    if sort_key is SortKey.TIME:
        entries.sort(
            key=lambda item: (
                not item.is_dir,
                -(item.modified_time or 0.0),
                item.display_name.casefold(),
            )
        )
        return
    entries.sort(key=lambda item: (not item.is_dir, item.display_name.casefold(), item.display_name))


def scan_directory(path: Path, sort_key: SortKey = SortKey.NAME) -> DirectoryListing:
    """List every child of ``path`` with kind, size, and mtime metadata.

    Raises ``FileSystemError`` when the directory cannot be read. Per-child
    stat failures only drop that child's metadata.
    """
    entries: list[Entry] = []
    try:
        with os.scandir(path) as children:
            for child in children:
                kind = _entry_kind(child)
                size: int | None = None
                modified_time: float | None = None
                try:
                    stat = child.stat(follow_symlinks=False)
                    modified_time = float(stat.st_mtime)
                    if kind is not EntryKind.DIRECTORY:
                        size = int(stat.st_size)
                except OSError:
                    pass
                entries.append(
                    Entry(
                        path=Path(child.path),
                        display_name=child.name,
                        kind=kind,
                        size=size,
                        modified_time=modified_time,
                    )
                )
    except OSError as exc:
        raise FileSystemError.from_os_error(exc, path) from exc

    _sort_entries(entries, sort_key)
    return DirectoryListing(entries=entries, sort_key=sort_key)
