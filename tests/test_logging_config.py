"""Tests for logging setup and optional key-event tracing."""

from __future__ import annotations

import io
import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from bm import logging_config
from bm.logging_config import KEY_LOGGER, setup_logging


class SetupLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        for handler in KEY_LOGGER.handlers:
            handler.close()
        KEY_LOGGER.handlers = []
        logging_config.logger.handlers = []

    def test_console_warnings_use_bracketed_level_prefix(self) -> None:
        stream = io.StringIO()
        with mock.patch.dict(os.environ, {}, clear=True), mock.patch("bm.logging_config.sys.stderr", stream):
            setup_logging()
            logging.getLogger("bm.clipboard").warning("no clipboard tool")
            logging.getLogger("bm.clipboard").info("hidden")

        self.assertEqual(stream.getvalue(), "[Warning]: no clipboard tool\n")

    def test_repeated_setup_does_not_duplicate_handlers(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            setup_logging()
            setup_logging()
        self.assertEqual(len(logging_config.logger.handlers), 1)

    def test_key_trace_is_disabled_by_default(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            setup_logging()
        self.assertTrue(KEY_LOGGER.disabled)

    def test_key_trace_writes_to_log_dir_when_enabled(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_dir = Path(tmp) / "logs"
            with mock.patch.dict(os.environ, {"BM_KEYTRACE": "yes"}):
                setup_logging(log_dir=log_dir)
            KEY_LOGGER.debug("decoded event")
            for handler in KEY_LOGGER.handlers:
                handler.flush()

            self.assertFalse(KEY_LOGGER.disabled)
            self.assertIn("decoded event", (log_dir / "keytrace.log").read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
