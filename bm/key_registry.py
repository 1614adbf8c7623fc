"""Lookup table from decoded input events to picker actions."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from .input import InputEvent

T = TypeVar("T")


@dataclass(frozen=True)
class KeyBinding(Generic[T]):
    """Every event in ``events`` triggers ``handler``."""

    events: tuple[InputEvent, ...]
    handler: Callable[[], T]


class KeyRegistry(Generic[T]):
    """Exact-match table: an event either has one action or none."""

    def __init__(self) -> None:
        self._handlers: dict[InputEvent, Callable[[], T]] = {}

    def register_binding(self, binding: KeyBinding[T]) -> KeyRegistry[T]:
        """Bind each event of ``binding``; a later binding for an event replaces the earlier one."""
        for event in binding.events:
            self._handlers[event] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyBinding[T]) -> KeyRegistry[T]:
        """Bind several bindings in order; returns the registry so calls can chain."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, event: InputEvent) -> T | None:
        """Run the action bound to ``event``; ``None`` when the event is unbound."""
        handler = self._handlers.get(event)
        if handler is None:
            return None
        return handler()
