"""Cursor and viewport arithmetic for the scrolling entry list.

The cursor is the authoritative in-process mirror of what the terminal
shows: ``index`` is the selected entry and ``skip`` the number of entries
scrolled past above the first visible row. Every operation leaves
``0 <= index - skip < capacity`` true.
"""

from __future__ import annotations

from dataclasses import dataclass

HEADER_ROWS = 2
BOTTOM_MARGIN_ROWS = 1


@dataclass(frozen=True)
class ViewportGeometry:
    """Row layout of the list area for one terminal height."""

    rows: int
    header_rows: int = HEADER_ROWS
    bottom_margin_rows: int = BOTTOM_MARGIN_ROWS

    @property
    def capacity(self) -> int:
        return max(1, self.rows - self.header_rows - self.bottom_margin_rows)

    @property
    def first_entry_row(self) -> int:
        """1-based terminal row of the first visible entry."""
        return self.header_rows + 1

    def row_for_offset(self, offset: int) -> int:
        return self.first_entry_row + offset


@dataclass(frozen=True)
class CursorSnapshot:
    index: int = 0
    skip: int = 0


class NavigationCursor:
    """Selected index, scroll offset, and capacity for one listing."""

    def __init__(self, capacity: int, length: int = 0) -> None:
        self.capacity = max(1, capacity)
        self.length = max(0, length)
        self.index = 0
        self.skip = 0

    def __repr__(self) -> str:
        return (
            f"NavigationCursor(index={self.index}, skip={self.skip}, "
            f"capacity={self.capacity}, length={self.length})"
        )

    @property
    def is_empty(self) -> bool:
        return self.length == 0

    @property
    def screen_offset(self) -> int:
        """Zero-based row of the pointer glyph inside the viewport."""
        return self.index - self.skip

    @property
    def max_skip(self) -> int:
        return max(0, self.length - self.capacity)

    def at_bottom_row(self) -> bool:
        return self.screen_offset == self.capacity - 1

    def at_top_row(self) -> bool:
        return self.screen_offset == 0

    def visible_range(self) -> range:
        return range(self.skip, min(self.length, self.skip + self.capacity))

    def move_down(self) -> bool:
        if self.is_empty or self.index >= self.length - 1:
            return False
        if self.at_bottom_row() and self.length > self.capacity:
            self.skip += 1
        self.index += 1
        return True

    def move_up(self) -> bool:
        if self.is_empty or self.index == 0:
            return False
        if self.at_top_row() and self.skip > 0:
            self.skip -= 1
        self.index -= 1
        return True

    def move_top(self) -> bool:
        if self.is_empty:
            return False
        changed = self.index != 0 or self.skip != 0
        self.index = 0
        self.skip = 0
        return changed

    def move_bottom(self, length: int | None = None) -> bool:
        if length is not None:
            self.length = max(0, length)
        if self.is_empty:
            return False
        before = (self.index, self.skip)
        if self.length > self.capacity:
            self.skip = self.length - self.capacity
        self.index = self.length - 1
        return (self.index, self.skip) != before

    def set_skip(self, skip: int) -> None:
        """Scroll the window, dragging the pointer along when it falls outside."""
        self.skip = max(0, min(skip, self.max_skip))
        self._keep_index_visible()

    def set_length(self, length: int) -> None:
        """Adopt a new listing length, clamping index and skip into range."""
        self.length = max(0, length)
        self._normalize()

    def set_capacity(self, capacity: int) -> None:
        self.capacity = max(1, capacity)
        self._normalize()

    def reset(self, length: int | None = None) -> None:
        """Return to the default top-of-list state."""
        if length is not None:
            self.length = max(0, length)
        self.index = 0
        self.skip = 0

    def snapshot(self) -> CursorSnapshot:
        return CursorSnapshot(index=self.index, skip=self.skip)

    def restore(self, snapshot: CursorSnapshot, length: int | None = None) -> None:
        if length is not None:
            self.length = max(0, length)
        self.index = snapshot.index
        self.skip = snapshot.skip
        self._normalize()

    def _keep_index_visible(self) -> None:
        if self.is_empty:
            self.index = 0
            return
        if self.index < self.skip:
            self.index = self.skip
        elif self.index >= self.skip + self.capacity:
            self.index = self.skip + self.capacity - 1
        self.index = min(self.index, self.length - 1)

    def _normalize(self) -> None:
        if self.is_empty:
            self.index = 0
            self.skip = 0
            return
        self.index = max(0, min(self.index, self.length - 1))
        self.skip = max(0, min(self.skip, self.max_skip))
        if self.index < self.skip:
            self.skip = self.index
        elif self.index >= self.skip + self.capacity:
            self.skip = self.index - self.capacity + 1
