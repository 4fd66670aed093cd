"""Contiguous multi-select range used by visual-select mode."""

from __future__ import annotations

from ..model import DirectoryListing


class SelectionRange:
    """Anchor plus current index; the selection is everything in between.

    The selected set is re-derived from the two endpoints on every update, so
    a jump of any size (``g``/``G``) produces the same flags as stepping there
    one row at a time.
    """

    def __init__(self, anchor: int) -> None:
        self.anchor = anchor
        self.current = anchor

    def __repr__(self) -> str:
        return f"SelectionRange(anchor={self.anchor}, current={self.current})"

    @property
    def start(self) -> int:
        return min(self.anchor, self.current)

    @property
    def end(self) -> int:
        return max(self.anchor, self.current)

    def contains(self, idx: int) -> bool:
        return self.start <= idx <= self.end

    def update(self, current: int) -> None:
        self.current = current

    def apply(self, listing: DirectoryListing) -> None:
        """Write the derived range into ``selected`` flags of every entry."""
        for idx, entry in enumerate(listing.entries):
            entry.selected = self.contains(idx)
