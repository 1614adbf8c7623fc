"""Terminal control helpers for the picker session.

Owns the raw-mode lifecycle, alternate-screen switching, and the one-time
window size query used for rendering.
"""

from __future__ import annotations

import contextlib
import logging
import os
import termios
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_TERMINAL_SIZE = (80, 24)

# termios attribute list indices
_IFLAG = 0
_LFLAG = 3


@dataclass(frozen=True)
class TerminalConfig:
    """Window dimensions captured once at session start."""

    width: int
    height: int


def query_terminal_size(fd: int) -> TerminalConfig:
    """Return the size of the terminal on ``fd``.

    Falls back to 80x24 with a warning when the descriptor is not a terminal.
    """
    try:
        size = os.get_terminal_size(fd)
    except OSError as exc:
        logger.warning("could not get size of terminal (%s); assuming %dx%d", exc, *DEFAULT_TERMINAL_SIZE)
        return TerminalConfig(*DEFAULT_TERMINAL_SIZE)
    return TerminalConfig(width=max(1, size.columns), height=max(1, size.lines))


class TerminalController:
    """Manage raw-mode transitions for one stdin/stdout pair."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_raw_mode(self) -> None:
        """Disable echo, line buffering and flow control; enter the alternate screen."""
        raw = [list(attr) if isinstance(attr, list) else attr for attr in self._saved_tty_state]
        raw[_LFLAG] &= ~(termios.ECHO | termios.ICANON)
        raw[_IFLAG] &= ~termios.IXON
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, raw)
        # Enter alternate screen and hide cursor.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")

    def disable_raw_mode(self) -> None:
        """Restore the captured terminal state and the main screen buffer."""
        # Show cursor and restore the main screen buffer.
        os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def write(self, text: str) -> None:
        os.write(self.stdout_fd, text.encode("utf-8"))

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with raw-mode enter/exit calls."""
        try:
            self.enable_raw_mode()
            yield
        finally:
            self.disable_raw_mode()
