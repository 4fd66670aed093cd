"""Filesystem mutations requested by the browser: trash, paste, rename, mkdir."""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Sequence
from pathlib import Path

from ..errors import FileSystemError, InvalidPathError, NameCollisionError
from ..model import Entry, EntryKind
from .naming import available_name

logger = logging.getLogger(__name__)


def _existing_names(directory: Path) -> set[str]:
    try:
        return set(os.listdir(directory))
    except OSError as exc:
        raise FileSystemError.from_os_error(exc, directory) from exc


class FileOperations:
    """Mutations rooted at one trash directory.

    Deleting moves items into the trash under a collision-free name; items
    already inside the trash are removed for good.
    """

    def __init__(self, trash_dir: Path) -> None:
        self.trash_dir = trash_dir

    def _in_trash(self, path: Path) -> bool:
        try:
            return path.resolve().is_relative_to(self.trash_dir.resolve())
        except OSError:
            return False

    def delete(self, entry: Entry) -> None:
        if self._in_trash(entry.path.parent):
            self._remove_permanently(entry)
            return
        name = available_name(entry.display_name, _existing_names(self.trash_dir), entry.is_dir)
        destination = self.trash_dir / name
        try:
            shutil.move(str(entry.path), str(destination))
        except OSError as exc:
            raise FileSystemError.from_os_error(exc, entry.path) from exc
        logger.info("moved %s to trash as %s", entry.path, destination)

    def _remove_permanently(self, entry: Entry) -> None:
        try:
            if entry.kind is EntryKind.DIRECTORY:
                shutil.rmtree(entry.path)
            else:
                entry.path.unlink()
        except OSError as exc:
            raise FileSystemError.from_os_error(exc, entry.path) from exc
        logger.info("removed %s", entry.path)

    def paste(self, entries: Sequence[Entry], destination: Path) -> list[Path]:
        """Copy ``entries`` into ``destination``, renaming around collisions."""
        pasted: list[Path] = []
        for entry in entries:
            name = available_name(entry.display_name, _existing_names(destination), entry.is_dir)
            target = destination / name
            try:
                if entry.kind is EntryKind.DIRECTORY:
                    shutil.copytree(entry.path, target, symlinks=True)
                else:
                    shutil.copy2(entry.path, target, follow_symlinks=False)
            except FileExistsError as exc:
                raise NameCollisionError(f"{target} appeared while pasting") from exc
            except OSError as exc:
                raise FileSystemError.from_os_error(exc, entry.path) from exc
            logger.info("pasted %s to %s", entry.path, target)
            pasted.append(target)
        return pasted

    def rename(self, old_path: Path, new_path: Path) -> None:
        if not new_path.name:
            raise InvalidPathError("New name must not be empty.")
        if new_path != old_path and os.path.lexists(new_path):
            raise NameCollisionError(f"{new_path.name} already exists.")
        try:
            os.rename(old_path, new_path)
        except OSError as exc:
            raise FileSystemError.from_os_error(exc, old_path) from exc
        logger.info("renamed %s to %s", old_path, new_path)

    def mkdir(self, path: Path) -> None:
        if not path.name:
            raise InvalidPathError("Directory name must not be empty.")
        try:
            path.mkdir()
        except OSError as exc:
            raise FileSystemError.from_os_error(exc, path) from exc
        logger.info("created directory %s", path)

    def empty_trash(self) -> None:
        try:
            if self.trash_dir.exists():
                shutil.rmtree(self.trash_dir)
            self.trash_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileSystemError.from_os_error(exc, self.trash_dir) from exc
        logger.info("emptied trash %s", self.trash_dir)
