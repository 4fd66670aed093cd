from __future__ import annotations

import os
import unittest
from contextlib import contextmanager
from pathlib import Path
from unittest import mock

from fake_services import ROOT, FakeFileSystem

from lazyfm.config import BrowserConfig
from lazyfm.engine.controller import ModeController
from lazyfm.errors import TooSmallViewportError
from lazyfm.model import EntryKind, SortKey
from lazyfm.runtime import app as app_mod
from lazyfm.runtime.loop import normalize_enter, run_main_loop


class _FakeTerminal:
    def __init__(self) -> None:
        self.frames = []
        self.entered = 0
        self.exited = 0

    @contextmanager
    def raw_mode(self):
        self.entered += 1
        try:
            yield
        finally:
            self.exited += 1

    def draw(self, intent) -> None:
        self.frames.append(intent)


def _fake_fs() -> FakeFileSystem:
    return FakeFileSystem(
        {
            ROOT: {"d0": EntryKind.DIRECTORY, "d1": EntryKind.DIRECTORY, "a.txt": EntryKind.FILE},
            ROOT / "d0": {},
            ROOT / "d1": {"inner.txt": EntryKind.FILE},
        }
    )


def _controller() -> ModeController:
    controller = ModeController(ROOT, _fake_fs().services(), rows=6)
    controller.load()
    return controller


def _size(columns: int = 80, lines: int = 6):
    return lambda: os.terminal_size((columns, lines))


class NormalizeEnterTests(unittest.TestCase):
    def test_crlf_reports_single_enter(self) -> None:
        key, skip = normalize_enter("ENTER_CR", False)
        self.assertEqual((key, skip), ("ENTER", True))
        self.assertEqual(normalize_enter("ENTER_LF", skip), (None, False))

    def test_bare_lf_is_enter(self) -> None:
        self.assertEqual(normalize_enter("ENTER_LF", False), ("ENTER", False))

    def test_other_keys_pass_through_and_reset_skip(self) -> None:
        self.assertEqual(normalize_enter("j", True), ("j", False))


class RuntimeLoopTests(unittest.TestCase):
    def test_loop_dispatches_keys_and_redraws_after_each(self) -> None:
        controller = _controller()
        terminal = _FakeTerminal()
        keys = ["j", "ENTER_CR", "ENTER_LF", "h", ""]

        with mock.patch("lazyfm.runtime.loop.read_key", side_effect=keys):
            run_main_loop(controller, terminal, stdin_fd=0, terminal_size=_size())

        self.assertEqual(controller.current_dir, ROOT)
        self.assertEqual(controller.cursor.index, 1)
        self.assertEqual(len(terminal.frames), 4)
        self.assertEqual((terminal.entered, terminal.exited), (1, 1))

    def test_loop_stops_when_controller_requests_quit(self) -> None:
        controller = _controller()
        terminal = _FakeTerminal()

        with mock.patch("lazyfm.runtime.loop.read_key", side_effect=["Z", "Z", "j"]) as read_key:
            run_main_loop(controller, terminal, stdin_fd=0, terminal_size=_size())

        self.assertEqual(read_key.call_count, 2)
        self.assertTrue(controller.quit_requested)

    def test_keyboard_interrupt_does_not_end_session(self) -> None:
        controller = _controller()
        terminal = _FakeTerminal()

        with mock.patch("lazyfm.runtime.loop.read_key", side_effect=[KeyboardInterrupt(), "j", ""]):
            run_main_loop(controller, terminal, stdin_fd=0, terminal_size=_size())

        self.assertEqual(controller.cursor.index, 1)

    def test_terminal_resize_updates_capacity_and_redraws(self) -> None:
        controller = _controller()
        terminal = _FakeTerminal()
        sizes = iter([os.terminal_size((80, 6)), os.terminal_size((100, 10))])

        with mock.patch("lazyfm.runtime.loop.read_key", side_effect=["x", ""]):
            run_main_loop(controller, terminal, stdin_fd=0, terminal_size=lambda: next(sizes))

        self.assertEqual(controller.cursor.capacity, 7)
        self.assertEqual(terminal.frames[-1].clear_rows, tuple(range(1, 11)))


class RunBrowserTests(unittest.TestCase):
    def test_too_small_terminal_is_rejected(self) -> None:
        with self.assertRaises(TooSmallViewportError):
            app_mod.check_terminal_size(49, 24)
        with self.assertRaises(TooSmallViewportError):
            app_mod.check_terminal_size(80, 5)
        app_mod.check_terminal_size(50, 6)

    def test_run_browser_refuses_small_terminal_before_raw_mode(self) -> None:
        with mock.patch.object(app_mod, "default_terminal_size", _size(40, 10)), mock.patch.object(
            app_mod, "TerminalController"
        ) as terminal_cls:
            with self.assertRaises(TooSmallViewportError):
                app_mod.run_browser(Path("/tmp"), BrowserConfig(), stdin_fd=0, stdout_fd=1)

        terminal_cls.assert_not_called()

    def test_run_browser_persists_changed_sort_key(self) -> None:
        fs = _fake_fs()

        def toggle_sort(controller, terminal, stdin_fd):
            controller.handle_key("t")

        with mock.patch.object(app_mod, "default_terminal_size", _size()), mock.patch.object(
            app_mod, "TerminalController"
        ), mock.patch.object(app_mod, "build_default_services", return_value=fs.services()), mock.patch.object(
            app_mod, "run_main_loop", side_effect=toggle_sort
        ), mock.patch.object(app_mod, "save_sort_key") as save_sort_key:
            app_mod.run_browser(ROOT, BrowserConfig(), stdin_fd=0, stdout_fd=1)

        save_sort_key.assert_called_once_with(SortKey.TIME)

    def test_run_browser_does_not_save_unchanged_sort_key(self) -> None:
        fs = _fake_fs()
        with mock.patch.object(app_mod, "default_terminal_size", _size()), mock.patch.object(
            app_mod, "TerminalController"
        ), mock.patch.object(app_mod, "build_default_services", return_value=fs.services()), mock.patch.object(
            app_mod, "run_main_loop"
        ), mock.patch.object(app_mod, "save_sort_key") as save_sort_key:
            app_mod.run_browser(ROOT, BrowserConfig(), stdin_fd=0, stdout_fd=1)

        save_sort_key.assert_not_called()
        self.assertEqual(fs.scans, [(ROOT, SortKey.NAME)])


if __name__ == "__main__":
    unittest.main()
