"""Exception hierarchy shared by the browser engine and its collaborators.

Per-operation failures are raised by services and caught by the mode
controller, which turns them into warning rows. Startup failures escape to
the CLI and end the process before raw mode is entered.
"""

from __future__ import annotations

from pathlib import Path


class LazyFmError(Exception):
    """Base class for every error the browser reports to the user."""


class FileSystemError(LazyFmError):
    """Read, write, or scan failure reported by the filesystem."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path

    @classmethod
    def from_os_error(cls, exc: OSError, path: Path | None = None) -> FileSystemError:
        target = path if path is not None else exc.filename
        reason = exc.strerror or str(exc)
        if target is None:
            return cls(reason)
        return cls(f"{reason}: {target}", Path(target))


class InvalidPathError(LazyFmError):
    """A user-supplied path or name cannot be used."""


class NameCollisionError(LazyFmError):
    """No collision-free destination name could be produced."""


class ProcessError(LazyFmError):
    """A child process could not be spawned or exited non-zero."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class TooSmallViewportError(LazyFmError):
    """Terminal is smaller than the minimum supported size."""


class OutOfBoundsError(LazyFmError, IndexError):
    """Edit position lies outside the edit buffer."""
