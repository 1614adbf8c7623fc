"""Persistent bookmark storage.

Bookmarks live in a JSON object under the per-user config directory. The
plain-text ``~/.bm`` file written by earlier versions is still read when no
JSON store exists yet. Loading is defensive: malformed or missing data falls
back to an empty list.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "bm"
CONFIG_FILENAME = "bookmarks.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LEGACY_CONFIG_PATH = Path.home() / ".bm"
CONFIG_PATH = DEFAULT_CONFIG_PATH


def _dedupe(paths: list[object]) -> list[str]:
    """Keep non-empty string entries in first-seen order."""
    seen: set[str] = set()
    out: list[str] = []
    for path in paths:
        if not isinstance(path, str) or not path or path in seen:
            continue
        seen.add(path)
        out.append(path)
    return out


def _load_legacy_paths(legacy_path: Path) -> list[str]:
    """Read the one-path-per-line legacy file, skipping blank lines."""
    try:
        text = legacy_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return []
    return _dedupe([line for line in text.splitlines() if line.strip()])


def load_config() -> dict[str, object]:
    """Load the persisted JSON object, or ``{}`` when missing/unreadable/malformed."""
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def load_paths() -> list[str]:
    """Return saved bookmark paths in display order.

    Non-list ``paths`` values and non-string entries are dropped. When the
    JSON store has never been written the legacy ``~/.bm`` file is used.
    """
    if not CONFIG_PATH.exists() and CONFIG_PATH == DEFAULT_CONFIG_PATH:
        return _load_legacy_paths(LEGACY_CONFIG_PATH)
    value = load_config().get("paths")
    if not isinstance(value, list):
        return []
    return _dedupe(value)


def save_paths(paths: list[str]) -> bool:
    """Persist ``paths`` as pretty-printed JSON.

    Write failures are logged and reported through the return value so the
    session can still exit cleanly.
    """
    config = load_config()
    config["paths"] = list(paths)
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(config, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not save bookmarks to %s: %s", CONFIG_PATH, exc)
        return False
    return True


def to_absolute(raw_path: str) -> str:
    """Expand ``~`` and resolve ``raw_path`` to an existing absolute path.

    Raises ``FileNotFoundError`` when the path does not exist.
    """
    expanded = Path(os.path.expanduser(raw_path))
    return str(expanded.resolve(strict=True))
