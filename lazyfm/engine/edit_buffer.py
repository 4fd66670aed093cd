"""Single-line text model shared by rename, mkdir, filter, and command prompts."""

from __future__ import annotations

from ..errors import OutOfBoundsError


def is_editable(text: str) -> bool:
    """Return whether ``text`` may be typed into an edit buffer.

    Only printable ASCII is accepted so one character always occupies one
    terminal column.
    """
    return bool(text) and text.isascii() and text.isprintable()


class EditBuffer:
    """Ordered characters plus a cursor offset in ``[0, len(text)]``."""

    def __init__(self, text: str = "") -> None:
        self._chars: list[str] = list(text)
        self.cursor = len(self._chars)

    @property
    def text(self) -> str:
        return "".join(self._chars)

    def __len__(self) -> int:
        return len(self._chars)

    def __repr__(self) -> str:
        return f"EditBuffer(text={self.text!r}, cursor={self.cursor})"

    def insert_at(self, pos: int, ch: str) -> None:
        if pos < 0 or pos > len(self._chars):
            raise OutOfBoundsError(f"insert position {pos} outside 0..{len(self._chars)}")
        self._chars[pos:pos] = list(ch)

    def delete_before(self, pos: int) -> bool:
        """Remove the character at ``pos - 1``; ``False`` when ``pos`` is 0."""
        if pos <= 0 or pos > len(self._chars):
            return False
        del self._chars[pos - 1]
        return True

    def insert(self, ch: str) -> None:
        """Insert at the cursor and advance past the inserted text."""
        self.insert_at(self.cursor, ch)
        self.cursor += len(ch)

    def backspace(self) -> bool:
        if not self.delete_before(self.cursor):
            return False
        self.cursor -= 1
        return True

    def move_left(self) -> bool:
        if self.cursor == 0:
            return False
        self.cursor -= 1
        return True

    def move_right(self) -> bool:
        if self.cursor >= len(self._chars):
            return False
        self.cursor += 1
        return True
