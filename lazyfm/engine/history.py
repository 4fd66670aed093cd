"""Directory-descent history of saved cursor positions."""

from __future__ import annotations

from .cursor import CursorSnapshot

MAX_HISTORY_DEPTH = 256


class HistoryStack:
    """LIFO of cursor snapshots, one per directory level descended.

    A frame is pushed right before entering a child directory and popped when
    returning to the parent, restoring the cursor it had in the parent.
    """

    def __init__(self, max_depth: int = MAX_HISTORY_DEPTH) -> None:
        self.max_depth = max(1, max_depth)
        self.frames: list[CursorSnapshot] = []

    def __len__(self) -> int:
        return len(self.frames)

    def push(self, snapshot: CursorSnapshot) -> None:
        self.frames.append(snapshot)
        overflow = len(self.frames) - self.max_depth
        if overflow > 0:
            del self.frames[:overflow]

    def pop(self) -> CursorSnapshot | None:
        if not self.frames:
            return None
        return self.frames.pop()

    def clear(self) -> None:
        self.frames.clear()
