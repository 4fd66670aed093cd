"""Tests for terminal mode switching and frame output.

Verifies raw-mode lifecycle safety and the escape payload produced for a frame.
"""

from __future__ import annotations

import termios
import unittest
from unittest import mock

from lazyfm.render import DrawLine, RenderIntent
from lazyfm.terminal import TerminalController, frame_payload, move_to


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("lazyfm.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "lazyfm.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("lazyfm.terminal.os.write") as write_mock, mock.patch(
            "lazyfm.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"\x1b[?1049h\x1b[?25l"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[0 q\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        with mock.patch("lazyfm.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()

    def test_draw_writes_utf8_frame(self) -> None:
        intent = RenderIntent(clear_rows=(1,), lines=(DrawLine(1, 2, "→"),))
        with mock.patch("lazyfm.terminal.termios.tcgetattr", return_value=[0]), mock.patch(
            "lazyfm.terminal.os.write"
        ) as write_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.draw(intent)

        fd, payload = write_mock.call_args.args
        self.assertEqual(fd, 1)
        self.assertIn("→".encode("utf-8"), payload)


class FramePayloadTests(unittest.TestCase):
    def test_rows_are_cleared_before_lines_are_drawn(self) -> None:
        intent = RenderIntent(
            clear_rows=(1, 2, 3),
            lines=(DrawLine(1, 1, "/tmp"), DrawLine(3, 3, "file.txt")),
            pointer_row=3,
        )
        payload = frame_payload(intent)

        self.assertTrue(payload.startswith("\x1b[?25l"))
        for row in (1, 2, 3):
            self.assertIn(move_to(row, 1) + "\x1b[2K", payload)
        self.assertLess(payload.index("\x1b[2K"), payload.index("/tmp"))
        self.assertIn(move_to(3, 3) + "file.txt", payload)
        self.assertTrue(payload.endswith(move_to(3, 1) + ">"))

    def test_text_cursor_is_shown_as_blinking_block(self) -> None:
        intent = RenderIntent(clear_rows=(2,), lines=(), text_cursor=(2, 6))
        payload = frame_payload(intent)
        self.assertTrue(payload.endswith(move_to(2, 6) + "\x1b[?25h\x1b[1 q"))

    def test_move_to_clamps_to_first_cell(self) -> None:
        self.assertEqual(move_to(0, -3), "\x1b[1;1H")


if __name__ == "__main__":
    unittest.main()
