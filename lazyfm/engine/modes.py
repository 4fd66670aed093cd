"""Interaction modes of the browser as an explicit tagged variant.

Each mode carries exactly the transient state it needs (edit buffer,
selection range, pending confirmation) and is discarded when the controller
returns to :class:`Browse`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from ..model import DirectoryListing, Entry
from .edit_buffer import EditBuffer
from .selection import SelectionRange


class LineEditKind(Enum):
    RENAME = "rename"
    NEW_DIRECTORY = "new_directory"
    FILTER = "filter"
    COMMAND = "command"


class ConfirmAction(Enum):
    DELETE = "delete"
    EMPTY_TRASH = "empty_trash"
    QUIT = "quit"


@dataclass(frozen=True)
class Browse:
    pass


@dataclass
class VisualSelect:
    selection: SelectionRange


@dataclass
class LineEdit:
    """Single-line prompt; ``target`` and ``original`` depend on ``kind``.

    Rename keeps the entry being renamed in ``target``. Filter keeps the
    unfiltered listing in ``original`` so every keystroke filters from it.
    """

    kind: LineEditKind
    buffer: EditBuffer = field(default_factory=EditBuffer)
    target: Entry | None = None
    original: DirectoryListing | None = None


@dataclass
class ConfirmPrompt:
    action: ConfirmAction
    targets: list[Entry] = field(default_factory=list)
    # Row the cursor lands on once a visual-range delete is confirmed.
    cursor_index: int | None = None

    def accepts(self, key: str) -> bool:
        if self.action is ConfirmAction.QUIT:
            return key == "Z"
        return key in {"y", "Y"}


@dataclass(frozen=True)
class HelpView:
    pass


Mode = Union[Browse, VisualSelect, LineEdit, ConfirmPrompt, HelpView]
