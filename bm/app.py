"""Interactive picker session.

Wires the terminal, decoder, state machine and renderer together. The loop
itself only draws, reads one event and applies it; persistence and terminal
restoration happen once on the way out, whichever way the loop ends.
"""

from __future__ import annotations

import contextlib
import logging
import signal

from . import config
from .clipboard import SelectionMode
from .input import read_event
from .render import render_empty, render_screen
from .selection import QUIT, BookmarkList, SelectionStateMachine, Transition
from .terminal import TerminalConfig, TerminalController, query_terminal_size

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def sigterm_raises_system_exit():
    """Turn SIGTERM into ``SystemExit`` so ``finally`` blocks still run."""

    def _handler(signum, _frame):
        raise SystemExit(128 + signum)

    previous = signal.signal(signal.SIGTERM, _handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGTERM, previous)


def run_main_loop(
    machine: SelectionStateMachine,
    terminal: TerminalController,
    stdin_fd: int,
    mode: SelectionMode,
    term_config: TerminalConfig,
) -> Transition:
    """Draw, read and apply events in raw mode until a terminating transition."""
    with terminal.raw_mode():
        while True:
            if not machine.bookmarks:
                terminal.write(render_empty())
                return QUIT
            terminal.write(render_screen(machine.bookmarks, mode, term_config))
            try:
                event = read_event(stdin_fd)
            except EOFError:
                logger.debug("input closed; ending session")
                return QUIT
            transition = machine.apply(event)
            if transition.done:
                return transition


def run_session(bookmarks: BookmarkList, mode: SelectionMode, stdin_fd: int, stdout_fd: int) -> str | None:
    """Run the picker over ``bookmarks`` and return the selected path, if any.

    The (possibly edited) list is saved on every exit path, including errors
    and SIGTERM.
    """
    machine = SelectionStateMachine(bookmarks)
    try:
        term_config = query_terminal_size(stdout_fd)
        terminal = TerminalController(stdin_fd, stdout_fd)
        with sigterm_raises_system_exit():
            transition = run_main_loop(machine, terminal, stdin_fd, mode, term_config)
    finally:
        config.save_paths(list(bookmarks))
    return transition.selected
