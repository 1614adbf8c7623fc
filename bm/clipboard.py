"""Selection side effect: build a shell command and put it on the clipboard."""

from __future__ import annotations

import enum
import logging
import os
import shlex
import shutil
import subprocess
import sys

logger = logging.getLogger(__name__)


class SelectionMode(enum.Enum):
    LIST_DIRECTORY = "ls"
    SHOW_CONTENTS = "cat"
    CHANGE_DIRECTORY = "cd"


def build_command(path: str, mode: SelectionMode) -> str:
    """Return the shell command that applies ``mode`` to ``path``."""
    return f"{mode.value} {shlex.quote(path)}"


def _clipboard_commands() -> list[list[str]]:
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if os.name == "nt":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


def copy_text_to_clipboard(text: str) -> bool:
    """Best-effort clipboard copy across macOS, Windows, and common Linux tools."""
    if not text:
        return False

    for command in _clipboard_commands():
        if shutil.which(command[0]) is None:
            continue
        try:
            proc = subprocess.run(
                command,
                input=text,
                text=True,
                check=False,
            )
        except OSError as exc:
            logger.debug("clipboard tool %s failed to start: %s", command[0], exc)
            continue
        if proc.returncode == 0:
            return True
        logger.debug("clipboard tool %s exited with status %d", command[0], proc.returncode)
    return False


def emit_selection(path: str, mode: SelectionMode) -> str | None:
    """Copy the command for ``path`` to the clipboard.

    Returns the copied command, or ``None`` (after logging a warning) when no
    clipboard tool accepted it.
    """
    command = build_command(path, mode)
    if not copy_text_to_clipboard(command):
        logger.warning("could not copy %r to the clipboard; no working clipboard tool found", command)
        return None
    return command
