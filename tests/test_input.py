"""Regression tests for raw-key decoding and key dispatch tables.

Covers ESC timing, arrow sequences, and control-key token mapping.
"""

from __future__ import annotations

import os
import time
import unittest

from lazyfm import input as input_mod
from lazyfm.input import KeyComboBinding, KeyComboRegistry


class ReadKeyRegressionTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _read_all(self, data: bytes, count: int) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, data)
            return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"\x1b")
            started = time.monotonic()
            key = input_mod.read_key(read_fd, timeout_ms=20)
            elapsed = time.monotonic() - started
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "ESC")
        self.assertLess(elapsed, 0.2)

    def test_arrow_sequences_are_recognized(self) -> None:
        keys = self._read_all(b"\x1b[A\x1b[B\x1b[C\x1b[D\x1bOA", 5)
        self.assertEqual(keys, ["UP", "DOWN", "RIGHT", "LEFT", "UP"])

    def test_delete_sequence(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[3~", 1), ["DELETE"])

    def test_modified_arrow_is_read_whole(self) -> None:
        keys = self._read_all(b"\x1b[1;5Aj\x1b[1;2Dk", 4)
        self.assertEqual(keys, ["UP", "j", "LEFT", "k"])

    def test_unrecognised_sequence_is_consumed_whole(self) -> None:
        keys = self._read_all(b"\x1b[15~q\x1b[200~x\x1bOPy", 6)
        self.assertEqual(
            keys,
            [
                input_mod.UNKNOWN_SEQUENCE,
                "q",
                input_mod.UNKNOWN_SEQUENCE,
                "x",
                input_mod.UNKNOWN_SEQUENCE,
                "y",
            ],
        )

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1bj", 2), ["ESC", "j"])

    def test_control_tokens(self) -> None:
        keys = self._read_all(b"\x03\x7f\x08\r\n\t", 6)
        self.assertEqual(keys, ["CTRL_C", "BACKSPACE", "BACKSPACE", "ENTER_CR", "ENTER_LF", "TAB"])

    def test_multibyte_utf8_is_one_token(self) -> None:
        self.assertEqual(self._read_all("éa".encode("utf-8"), 2), ["é", "a"])

    def test_timeout_returns_empty_string(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            key = input_mod.read_key(read_fd, timeout_ms=10)
        finally:
            os.close(read_fd)
            os.close(write_fd)
        self.assertEqual(key, "")

    def test_closed_input_returns_empty_string(self) -> None:
        read_fd, write_fd = os.pipe()
        os.close(write_fd)
        try:
            key = input_mod.read_key(read_fd)
        finally:
            os.close(read_fd)
        self.assertEqual(key, "")


class KeyComboRegistryTests(unittest.TestCase):
    def test_dispatch_invokes_bound_handler(self) -> None:
        calls: list[str] = []
        registry = KeyComboRegistry(
            KeyComboBinding(("j", "DOWN"), lambda: calls.append("down")),
            KeyComboBinding(("k",), lambda: calls.append("up")),
        )

        self.assertTrue(registry.dispatch("DOWN"))
        self.assertTrue(registry.dispatch("k"))
        self.assertFalse(registry.dispatch("x"))
        self.assertEqual(calls, ["down", "up"])

    def test_duplicate_key_in_one_table_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            KeyComboRegistry(
                KeyComboBinding(("q",), lambda: None),
                KeyComboBinding(("q", "x"), lambda: None),
            )

    def test_extended_table_may_rebind_without_touching_base(self) -> None:
        calls: list[str] = []
        base = KeyComboRegistry(KeyComboBinding(("y",), lambda: calls.append("yank one")))
        visual = base.extended(
            KeyComboBinding(("y",), lambda: calls.append("yank range")),
            KeyComboBinding(("ESC",), lambda: calls.append("leave")),
        )

        visual.dispatch("y")
        base.dispatch("y")
        self.assertFalse(base.dispatch("ESC"))
        self.assertEqual(calls, ["yank range", "yank one"])


if __name__ == "__main__":
    unittest.main()
