"""Logging setup for the bm command.

Warnings go to stderr in the same ``[Warning]: ...`` shape the CLI uses for
its own messages. Setting ``BM_KEYTRACE=1`` additionally records every decoded
key event to a rotating ``keytrace.log`` under the per-user log directory.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "bm"
KEYTRACE_ENV = "BM_KEYTRACE"
KEYTRACE_FILENAME = "keytrace.log"

logger = logging.getLogger(APP_NAME)
KEY_LOGGER = logging.getLogger(f"{APP_NAME}.keyevents")


class _LevelPrefixFormatter(logging.Formatter):
    """Format records as ``[Level]: message``."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        return f"[{record.levelname.capitalize()}]: {message}"


def _keytrace_enabled() -> bool:
    return os.environ.get(KEYTRACE_ENV, "").lower() in {"1", "true", "yes"}


def setup_logging(console_level: int = logging.WARNING, log_dir: Path | None = None) -> None:
    """Configure the ``bm`` logger tree.

    Safe to call repeatedly; existing handlers are replaced. Never raises:
    a key-trace file that cannot be opened only disables tracing.
    """
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(_LevelPrefixFormatter("%(message)s"))
    console_handler.setLevel(console_level)

    logger.handlers = [console_handler]
    logger.setLevel(console_level)
    logger.propagate = False

    KEY_LOGGER.propagate = False
    KEY_LOGGER.setLevel(logging.DEBUG)
    KEY_LOGGER.handlers = []
    KEY_LOGGER.disabled = False

    if not _keytrace_enabled():
        KEY_LOGGER.addHandler(logging.NullHandler())
        KEY_LOGGER.disabled = True
        return

    trace_dir = log_dir if log_dir is not None else Path(user_log_dir(APP_NAME, appauthor=False))
    trace_path = trace_dir / KEYTRACE_FILENAME
    try:
        trace_dir.mkdir(parents=True, exist_ok=True)
        trace_handler = logging.handlers.RotatingFileHandler(
            trace_path, maxBytes=1 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )
    except OSError as exc:
        logger.warning("could not open key trace log %s: %s", trace_path, exc)
        KEY_LOGGER.disabled = True
        return
    trace_handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
    KEY_LOGGER.addHandler(trace_handler)
