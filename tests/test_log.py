from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path

from lazyfm.errors import FileSystemError
from lazyfm.log import init_log


def _reset_package_logger() -> None:
    logger = logging.getLogger("lazyfm")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


class InitLogTests(unittest.TestCase):
    def tearDown(self) -> None:
        _reset_package_logger()

    def test_session_log_file_receives_package_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = init_log(Path(tmp) / "logs", logging.DEBUG)
            logging.getLogger("lazyfm.services.fs_ops").debug("moved %s", "a.txt")
            _reset_package_logger()

            self.assertEqual(log_path.parent, Path(tmp) / "logs")
            self.assertEqual(log_path.suffix, ".log")
            content = log_path.read_text(encoding="utf-8")

        self.assertIn("===START===", content)
        self.assertIn("lazyfm.services.fs_ops - DEBUG - moved a.txt", content)

    def test_reinitializing_replaces_previous_handler(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            init_log(Path(tmp))
            init_log(Path(tmp))
            self.assertEqual(len(logging.getLogger("lazyfm").handlers), 1)
            _reset_package_logger()

    def test_unwritable_log_dir_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "file"
            blocker.write_text("", encoding="utf-8")
            with self.assertRaises(FileSystemError):
                init_log(blocker / "logs")


if __name__ == "__main__":
    unittest.main()
