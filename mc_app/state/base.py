"""Listener plumbing shared by the list-state primitives."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

E = TypeVar("E")

Listener = Callable[[E], None]


class StateEmitter(Generic[E]):
    """Synchronous change notification for one piece of state."""

    def __init__(self) -> None:
        self._listeners: list[Listener[E]] = []

    def subscribe(self, listener: Listener[E]) -> Callable[[], None]:
        """Register ``listener``; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def emit(self, event: E) -> None:
        for listener in list(self._listeners):
            listener(event)
