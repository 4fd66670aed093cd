"""Domain datatypes for directory listings shown by the browser."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class EntryKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


class SortKey(Enum):
    NAME = "name"
    TIME = "time"

    def toggled(self) -> SortKey:
        return SortKey.TIME if self is SortKey.NAME else SortKey.NAME


@dataclass
class Entry:
    """One filesystem item as produced by a directory scan."""

    path: Path
    display_name: str
    kind: EntryKind
    selected: bool = False
    size: int | None = None
    modified_time: float | None = None

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass
class DirectoryListing:
    """Ordered entries of one directory plus the sort key that ordered them.

    Entries are unique by path. Listings returned by :meth:`filtered` and
    :meth:`copy` own fresh ``Entry`` objects so selection flags never leak
    between an original listing and a derived one.
    """

    entries: list[Entry] = field(default_factory=list)
    sort_key: SortKey = SortKey.NAME

    def __post_init__(self) -> None:
        seen: set[Path] = set()
        for entry in self.entries:
            if entry.path in seen:
                raise ValueError(f"duplicate entry path in listing: {entry.path}")
            seen.add(entry.path)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __getitem__(self, idx: int) -> Entry:
        return self.entries[idx]

    def get(self, idx: int) -> Entry | None:
        if 0 <= idx < len(self.entries):
            return self.entries[idx]
        return None

    def filtered(self, keyword: str) -> DirectoryListing:
        """Return entries whose display name contains ``keyword`` (case-sensitive)."""
        return DirectoryListing(
            entries=[
                dataclasses.replace(entry, selected=False)
                for entry in self.entries
                if keyword in entry.display_name
            ],
            sort_key=self.sort_key,
        )

    def names(self) -> list[str]:
        return [entry.display_name for entry in self.entries]

    def selected_indices(self) -> list[int]:
        return [idx for idx, entry in enumerate(self.entries) if entry.selected]

    def selected_entries(self) -> list[Entry]:
        return [entry for entry in self.entries if entry.selected]

    def clear_selection(self) -> None:
        for entry in self.entries:
            entry.selected = False


__all__ = [
    "EntryKind",
    "SortKey",
    "Entry",
    "DirectoryListing",
]
