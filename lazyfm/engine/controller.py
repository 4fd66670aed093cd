"""Mode controller: the browser's finite state machine.

One key token goes in per call to :meth:`ModeController.handle_key`; the
handler for the active mode mutates the cursor, listing, edit buffer, or
selection and may call out to ``BrowserServices``. Service failures are
caught here, at the mode boundary, and become warning messages.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..errors import FileSystemError, InvalidPathError, LazyFmError
from ..input import KeyComboBinding, KeyComboRegistry
from ..model import DirectoryListing, Entry, EntryKind, SortKey
from ..services import BrowserServices
from .cursor import NavigationCursor, ViewportGeometry
from .edit_buffer import EditBuffer, is_editable
from .history import HistoryStack
from .modes import (
    Browse,
    ConfirmAction,
    ConfirmPrompt,
    HelpView,
    LineEdit,
    LineEditKind,
    Mode,
    VisualSelect,
)
from .selection import SelectionRange

logger = logging.getLogger(__name__)

INFO = "info"
WARNING = "warning"


@dataclass(frozen=True)
class StatusMessage:
    """One-shot message for the info row, cleared by the next key press."""

    text: str
    level: str = INFO

    @property
    def is_warning(self) -> bool:
        return self.level == WARNING


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


class ModeController:
    """Owns every piece of interactive state and dispatches keys by mode."""

    def __init__(
        self,
        start_dir: Path,
        services: BrowserServices,
        rows: int,
        sort_key: SortKey = SortKey.NAME,
        warn_before_delete: bool = True,
        home_dir: Path | None = None,
    ) -> None:
        self.services = services
        self.current_dir = start_dir
        self.sort_key = sort_key
        self.warn_before_delete = warn_before_delete
        self.home_dir = home_dir if home_dir is not None else Path.home()
        self.geometry = ViewportGeometry(rows)
        self.listing = DirectoryListing(sort_key=sort_key)
        self.cursor = NavigationCursor(self.geometry.capacity)
        self.history = HistoryStack()
        self.mode: Mode = Browse()
        self.yanked: list[Entry] = []
        self.status: StatusMessage | None = None
        self.quit_requested = False
        self.dirty = True

        self._handlers: dict[type, Callable[[str], None]] = {
            Browse: self._handle_browse_key,
            VisualSelect: self._handle_visual_key,
            LineEdit: self._handle_line_edit_key,
            ConfirmPrompt: self._handle_confirm_key,
            HelpView: self._handle_help_key,
        }
        movement = KeyComboRegistry(
            KeyComboBinding(("j", "DOWN"), self.cursor_down),
            KeyComboBinding(("k", "UP"), self.cursor_up),
            KeyComboBinding(("g",), self.cursor_top),
            KeyComboBinding(("G",), self.cursor_bottom),
        )
        self._browse_bindings = movement.extended(
            KeyComboBinding(("l", "ENTER", "RIGHT"), self.open_or_descend),
            KeyComboBinding(("h", "LEFT"), self.ascend),
            KeyComboBinding(("V",), self.enter_visual_select),
            KeyComboBinding(("c",), self.begin_rename),
            KeyComboBinding(("m",), self.begin_new_directory),
            KeyComboBinding(("/",), self.begin_filter),
            KeyComboBinding((":",), self.begin_command),
            KeyComboBinding(("D",), self.request_delete),
            KeyComboBinding(("H",), self.show_help),
            KeyComboBinding(("t",), self.toggle_sort_key),
            KeyComboBinding(("y",), self.yank_current),
            KeyComboBinding(("p",), self.paste_yanked),
            KeyComboBinding(("CTRL_C",), self.copy_name_to_clipboard),
            KeyComboBinding(("E",), self.request_empty_trash),
            KeyComboBinding(("Z",), self.request_quit),
        )
        self._visual_bindings = movement.extended(
            KeyComboBinding(("ESC",), self.exit_visual_select),
            KeyComboBinding(("S",), self.dump_selection),
            KeyComboBinding(("y",), self.yank_selection),
            KeyComboBinding(("D",), self.request_delete_selection),
        )

    # -- lifecycle -------------------------------------------------------

    def load(self) -> None:
        """Scan the start directory; failures propagate to the caller."""
        self.listing = self.services.scan(self.current_dir, self.sort_key)
        self.cursor.reset(len(self.listing))
        self.dirty = True

    def resize(self, rows: int) -> None:
        if rows == self.geometry.rows:
            return
        self.geometry = ViewportGeometry(rows)
        self.cursor.set_capacity(self.geometry.capacity)
        self.dirty = True

    @property
    def current_entry(self) -> Entry | None:
        if self.cursor.is_empty:
            return None
        return self.listing.get(self.cursor.index)

    def handle_key(self, key: str) -> bool:
        """Handle one key token and return ``True`` when the session should end."""
        self.status = None
        handler = self._handlers[type(self.mode)]
        try:
            handler(key)
        except LazyFmError as exc:
            self.warn(exc)
        self.dirty = True
        return self.quit_requested

    def warn(self, exc: LazyFmError | str) -> None:
        logger.warning("%s", exc)
        self.status = StatusMessage(str(exc), WARNING)

    def inform(self, text: str) -> None:
        logger.info("%s", text)
        self.status = StatusMessage(text, INFO)

    # -- listing helpers -------------------------------------------------

    def _replace_listing(self, listing: DirectoryListing) -> None:
        listing.clear_selection()
        self.listing = listing
        self.cursor.set_length(len(listing))

    def refresh_listing(self) -> None:
        """Rescan the current directory, keeping the cursor row where possible."""
        self._replace_listing(self.services.scan(self.current_dir, self.sort_key))

    def _change_directory(self, directory: Path, listing: DirectoryListing) -> None:
        logger.info("entering %s", directory)
        self.current_dir = directory
        self._replace_listing(listing)

    def _resync_after_command(self) -> None:
        """Rescan after a child process, climbing up if the directory vanished."""
        directory = self.current_dir
        while True:
            try:
                listing = self.services.scan(directory, self.sort_key)
            except FileSystemError:
                if directory.parent == directory:
                    raise
                directory = directory.parent
                self.history.clear()
                continue
            break
        if directory != self.current_dir:
            self._change_directory(directory, listing)
            self.cursor.reset(len(listing))
        else:
            self._replace_listing(listing)

    # -- browse: navigation ----------------------------------------------

    def _after_cursor_move(self) -> None:
        if isinstance(self.mode, VisualSelect):
            self.mode.selection.update(self.cursor.index)
            self.mode.selection.apply(self.listing)

    def cursor_down(self) -> None:
        if self.cursor.move_down():
            self._after_cursor_move()

    def cursor_up(self) -> None:
        if self.cursor.move_up():
            self._after_cursor_move()

    def cursor_top(self) -> None:
        if self.cursor.move_top():
            self._after_cursor_move()

    def cursor_bottom(self) -> None:
        if self.cursor.move_bottom(len(self.listing)):
            self._after_cursor_move()

    def open_or_descend(self) -> None:
        entry = self.current_entry
        if entry is None:
            return
        if entry.kind is EntryKind.DIRECTORY:
            self.descend(entry)
            return
        try:
            self.services.open_entry(entry)
        finally:
            self.refresh_listing()

    def descend(self, entry: Entry) -> None:
        child_listing = self.services.scan(entry.path, self.sort_key)
        self.history.push(self.cursor.snapshot())
        self._change_directory(entry.path, child_listing)
        self.cursor.reset(len(child_listing))

    def ascend(self) -> None:
        parent = self.current_dir.parent
        if parent == self.current_dir:
            return
        parent_listing = self.services.scan(parent, self.sort_key)
        self._change_directory(parent, parent_listing)
        frame = self.history.pop()
        if frame is None:
            self.cursor.reset(len(parent_listing))
        else:
            self.cursor.restore(frame, len(parent_listing))

    def toggle_sort_key(self) -> None:
        self.sort_key = self.sort_key.toggled()
        self._replace_listing(self.services.scan(self.current_dir, self.sort_key))
        self.cursor.reset(len(self.listing))

    def show_help(self) -> None:
        self.mode = HelpView()

    def _handle_browse_key(self, key: str) -> None:
        self._browse_bindings.dispatch(key)

    def _handle_help_key(self, key: str) -> None:
        self.mode = Browse()

    # -- visual select ---------------------------------------------------

    def enter_visual_select(self) -> None:
        if self.cursor.is_empty:
            return
        selection = SelectionRange(self.cursor.index)
        selection.apply(self.listing)
        self.mode = VisualSelect(selection)

    def exit_visual_select(self) -> None:
        self.listing.clear_selection()
        self.mode = Browse()

    def dump_selection(self) -> None:
        names = [entry.display_name for entry in self.listing.selected_entries()]
        self.inform("Selected: " + ", ".join(names))

    def yank_selection(self) -> None:
        self.yanked = [dataclasses.replace(entry, selected=False) for entry in self.listing.selected_entries()]
        self.exit_visual_select()
        self.inform(f"{_plural(len(self.yanked), 'item')} yanked")

    def request_delete_selection(self) -> None:
        assert isinstance(self.mode, VisualSelect)
        targets = self.listing.selected_entries()
        start = self.mode.selection.start
        self.exit_visual_select()
        self._request_delete(targets, cursor_index=start)

    def _handle_visual_key(self, key: str) -> None:
        self._visual_bindings.dispatch(key)

    # -- line edit -------------------------------------------------------

    def begin_rename(self) -> None:
        entry = self.current_entry
        if entry is None:
            return
        self.mode = LineEdit(LineEditKind.RENAME, EditBuffer(entry.display_name), target=entry)

    def begin_new_directory(self) -> None:
        self.mode = LineEdit(LineEditKind.NEW_DIRECTORY)

    def begin_filter(self) -> None:
        self.listing.clear_selection()
        self.mode = LineEdit(LineEditKind.FILTER, original=self.listing)

    def begin_command(self) -> None:
        self.mode = LineEdit(LineEditKind.COMMAND)

    def _handle_line_edit_key(self, key: str) -> None:
        mode = self.mode
        assert isinstance(mode, LineEdit)
        buffer = mode.buffer
        if key == "ESC":
            self._cancel_line_edit(mode)
        elif key == "ENTER":
            self.mode = Browse()
            self._commit_line_edit(mode)
        elif key == "BACKSPACE":
            if buffer.backspace():
                self._line_edit_changed(mode)
        elif key == "LEFT":
            buffer.move_left()
        elif key == "RIGHT":
            buffer.move_right()
        elif len(key) == 1 and is_editable(key):
            buffer.insert(key)
            self._line_edit_changed(mode)

    def _line_edit_changed(self, mode: LineEdit) -> None:
        if mode.kind is not LineEditKind.FILTER or mode.original is None:
            return
        self.listing = mode.original.filtered(mode.buffer.text)
        self.cursor.reset(len(self.listing))

    def _cancel_line_edit(self, mode: LineEdit) -> None:
        self.mode = Browse()
        if mode.kind is LineEditKind.FILTER and mode.original is not None:
            self._replace_listing(mode.original)
            self.cursor.reset(len(self.listing))

    def _commit_line_edit(self, mode: LineEdit) -> None:
        text = mode.buffer.text
        if mode.kind is LineEditKind.RENAME:
            self._commit_rename(mode.target, text)
        elif mode.kind is LineEditKind.NEW_DIRECTORY:
            self._commit_new_directory(text)
        elif mode.kind is LineEditKind.FILTER:
            self.listing.clear_selection()
            self.cursor.reset(len(self.listing))
        else:
            self._commit_command(text)

    def _commit_rename(self, target: Entry | None, text: str) -> None:
        if target is None:
            return
        if not text:
            raise InvalidPathError("New name must not be empty.")
        destination = self.current_dir / text
        self.services.rename(target.path, destination)
        self.refresh_listing()

    def _commit_new_directory(self, text: str) -> None:
        if not text:
            raise InvalidPathError("Directory name must not be empty.")
        self.services.mkdir(self.current_dir / text)
        self.refresh_listing()

    def _commit_command(self, text: str) -> None:
        words = text.split()
        if not words:
            return
        if words == ["q"]:
            self.quit_requested = True
            return
        command, args = words[0], words[1:]
        if command == "cd":
            self._change_directory_by_command(args)
            return
        try:
            self.services.run_process(command, args, self.current_dir)
        finally:
            self._resync_after_command()

    def _change_directory_by_command(self, args: list[str]) -> None:
        target = Path(args[0]).expanduser() if args else self.home_dir
        if not target.is_absolute():
            target = self.current_dir / target
        try:
            resolved = target.resolve()
            listing = self.services.scan(resolved, self.sort_key)
        except (OSError, FileSystemError) as exc:
            raise InvalidPathError(f"Cannot change directory to {target}: {exc}") from exc
        self.history.clear()
        self._change_directory(resolved, listing)
        self.cursor.reset(len(listing))

    # -- delete / confirm ------------------------------------------------

    def request_delete(self) -> None:
        entry = self.current_entry
        if entry is None:
            return
        self._request_delete([entry])

    def _request_delete(self, targets: list[Entry], cursor_index: int | None = None) -> None:
        if not targets:
            return
        if self.warn_before_delete:
            self.mode = ConfirmPrompt(ConfirmAction.DELETE, targets, cursor_index)
            return
        self.delete_entries(targets, cursor_index)

    def delete_entries(self, targets: list[Entry], cursor_index: int | None = None) -> None:
        """Delete ``targets``, then reload; ``cursor_index`` repositions the pointer first."""
        if cursor_index is not None:
            self.cursor.restore(
                dataclasses.replace(self.cursor.snapshot(), index=cursor_index), len(self.listing)
            )
        failures: list[LazyFmError] = []
        deleted = 0
        for entry in targets:
            try:
                self.services.delete(entry)
            except LazyFmError as exc:
                failures.append(exc)
            else:
                deleted += 1
        self.refresh_listing()
        if failures:
            raise failures[0]
        if len(self.listing) == 0:
            self.inform("List is empty. Press h/Left to go back.")
        else:
            self.inform(f"{_plural(deleted, 'item')} deleted")

    def request_empty_trash(self) -> None:
        self.mode = ConfirmPrompt(ConfirmAction.EMPTY_TRASH)

    def request_quit(self) -> None:
        self.mode = ConfirmPrompt(ConfirmAction.QUIT)

    def _handle_confirm_key(self, key: str) -> None:
        prompt = self.mode
        assert isinstance(prompt, ConfirmPrompt)
        self.mode = Browse()
        if not prompt.accepts(key):
            return
        if prompt.action is ConfirmAction.DELETE:
            self.delete_entries(prompt.targets, prompt.cursor_index)
        elif prompt.action is ConfirmAction.EMPTY_TRASH:
            self.services.empty_trash()
            self.inform("Trash emptied")
        else:
            self.quit_requested = True

    # -- yank / paste / clipboard ----------------------------------------

    def yank_current(self) -> None:
        entry = self.current_entry
        if entry is None:
            return
        self.yanked = [dataclasses.replace(entry, selected=False)]
        self.inform(f"{entry.display_name} yanked")

    def paste_yanked(self) -> None:
        if not self.yanked:
            return
        try:
            pasted = self.services.paste(self.yanked, self.current_dir)
        finally:
            self.refresh_listing()
        self.inform(f"{_plural(len(pasted), 'item')} pasted")

    def copy_name_to_clipboard(self) -> None:
        entry = self.current_entry
        if entry is None:
            return
        self.services.set_clipboard_text(entry.display_name)
        self.inform("file name copied!")
