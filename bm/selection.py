"""Bookmark list ownership and the selection state machine.

``BookmarkList`` keeps the ordered, duplicate-free paths together with the
cursor and updates both inside each mutating call. ``SelectionStateMachine``
maps decoded input events onto those mutations and reports whether the
interactive session should end.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .input import CTRL_Q, Direction, InputEvent
from .key_registry import KeyBinding, KeyRegistry


class BookmarkList:
    """Ordered absolute paths plus the highlighted index.

    ``cursor`` is ``None`` exactly when the list is empty and otherwise always
    satisfies ``0 <= cursor < len(self)``.
    """

    def __init__(self, paths: Iterable[str] = ()) -> None:
        self._paths: list[str] = []
        self._cursor: int | None = None
        for path in paths:
            self.add(path)

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __repr__(self) -> str:
        return f"BookmarkList({self._paths!r}, cursor={self._cursor!r})"

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(self._paths)

    @property
    def cursor(self) -> int | None:
        return self._cursor

    @property
    def current(self) -> str | None:
        """Return the highlighted path, or ``None`` for an empty list."""
        if self._cursor is None:
            return None
        return self._paths[self._cursor]

    def add(self, path: str) -> bool:
        """Append ``path`` unless already present; return whether it was added."""
        if path in self._paths:
            return False
        self._paths.append(path)
        if self._cursor is None:
            self._cursor = 0
        return True

    def move_up(self) -> bool:
        """Move the cursor up one row, wrapping from the top to the bottom."""
        if self._cursor is None:
            return False
        if self._cursor > 0:
            self._cursor -= 1
        else:
            self._cursor = len(self._paths) - 1
        return True

    def move_down(self) -> bool:
        """Move the cursor down one row, wrapping from the bottom to the top."""
        if self._cursor is None:
            return False
        if self._cursor < len(self._paths) - 1:
            self._cursor += 1
        else:
            self._cursor = 0
        return True

    def delete_current(self) -> str | None:
        """Remove the highlighted path and reindex the cursor.

        The cursor keeps its index so it lands on the entry that shifted into
        the slot; when the last row was removed it steps back by one, and it
        becomes ``None`` once the list is empty.
        """
        if self._cursor is None or self._cursor >= len(self._paths):
            return None
        removed = self._paths.pop(self._cursor)
        if not self._paths:
            self._cursor = None
        elif self._cursor >= len(self._paths):
            self._cursor = len(self._paths) - 1
        return removed


@dataclass(frozen=True)
class Transition:
    """Outcome of applying one event.

    ``done`` ends the session; ``selected`` requests the selection side
    effect for that path.
    """

    done: bool = False
    selected: str | None = None


CONTINUE = Transition()
QUIT = Transition(done=True)

ENTER_KEYS: tuple[InputEvent, ...] = (InputEvent.normal(ord("\n")), InputEvent.normal(ord("\r")))


class SelectionStateMachine:
    """Apply decoded input events to a ``BookmarkList``."""

    def __init__(self, bookmarks: BookmarkList) -> None:
        self.bookmarks = bookmarks
        self._registry: KeyRegistry[Transition] = KeyRegistry[Transition]().register_bindings(
            KeyBinding((InputEvent.control(CTRL_Q), InputEvent.normal(ord("q"))), self._quit),
            KeyBinding((InputEvent.arrow(Direction.UP),), self._move_up),
            KeyBinding((InputEvent.arrow(Direction.DOWN),), self._move_down),
            KeyBinding((InputEvent.normal(ord("d")),), self._delete),
            KeyBinding(ENTER_KEYS, self._select),
        )

    def apply(self, event: InputEvent) -> Transition:
        """Apply ``event``; unbound events leave the state untouched."""
        transition = self._registry.dispatch(event)
        return CONTINUE if transition is None else transition

    def _quit(self) -> Transition:
        return QUIT

    def _move_up(self) -> Transition:
        self.bookmarks.move_up()
        return CONTINUE

    def _move_down(self) -> Transition:
        self.bookmarks.move_down()
        return CONTINUE

    def _delete(self) -> Transition:
        self.bookmarks.delete_current()
        return CONTINUE

    def _select(self) -> Transition:
        selected = self.bookmarks.current
        if selected is None:
            return CONTINUE
        return Transition(done=True, selected=selected)
