"""Multi-select state compared by a caller-supplied equality.

Two storage strategies share one interface: a local store owned by the state
object (row expansion) and an external store that reads and writes a binding
owned elsewhere (the wizard form), so the selection outlives the view.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, Protocol, Sequence, TypeVar

from mc_app.state.base import StateEmitter

logger = logging.getLogger(__name__)

T = TypeVar("T")

EqualityFn = Callable[[T, T], bool]
ExternalState = tuple[Callable[[], Sequence[T]], Callable[[list[T]], None]]


class SelectionStore(Protocol[T]):
    def get(self) -> list[T]: ...

    def set(self, items: list[T]) -> None: ...


class LocalSelectionStore(Generic[T]):
    def __init__(self, initial: Sequence[T] = ()) -> None:
        self._selected: list[T] = list(initial)

    def get(self) -> list[T]:
        return list(self._selected)

    def set(self, items: list[T]) -> None:
        self._selected = list(items)


class ExternalSelectionStore(Generic[T]):
    """Adapter over a ``(get_value, set_value)`` binding owned by the caller."""

    def __init__(self, external_state: ExternalState[T]) -> None:
        self._get_value, self._set_value = external_state

    def get(self) -> list[T]:
        return list(self._get_value() or [])

    def set(self, items: list[T]) -> None:
        self._set_value(list(items))


class SelectionState(Generic[T]):
    """Tracks which items are selected.

    ``items`` is the window that ``select_all`` applies to; selections of items
    outside it are left untouched. With ``prune_missing`` (local stores only),
    replacing ``items`` drops selections that are no longer present.
    """

    def __init__(
        self,
        items: Sequence[T],
        is_equal: EqualityFn[T],
        external_state: ExternalState[T] | None = None,
        *,
        prune_missing: bool = False,
    ) -> None:
        self._items: list[T] = list(items)
        self._is_equal = is_equal
        self._store: SelectionStore[T]
        if external_state is not None:
            self._store = ExternalSelectionStore(external_state)
            self._prune_missing = False
        else:
            self._store = LocalSelectionStore()
            self._prune_missing = prune_missing
        self.changed: StateEmitter[list[T]] = StateEmitter()

    @property
    def is_external(self) -> bool:
        return isinstance(self._store, ExternalSelectionStore)

    @property
    def items(self) -> list[T]:
        return self._items

    @items.setter
    def items(self, value: Sequence[T]) -> None:
        self._items = list(value)
        if self._prune_missing:
            selected = self._store.get()
            kept = [s for s in selected if self._contains(self._items, s)]
            if len(kept) != len(selected):
                self._write(kept)

    @property
    def selected_items(self) -> list[T]:
        return self._store.get()

    def set_selected_items(self, items: Sequence[T]) -> None:
        deduped: list[T] = []
        for item in items:
            if not self._contains(deduped, item):
                deduped.append(item)
        self._write(deduped)

    def is_item_selected(self, item: T) -> bool:
        return self._contains(self._store.get(), item)

    def toggle_item_selected(self, item: T, is_selecting: bool | None = None) -> None:
        """Select or deselect one item; without a flag the current state flips."""
        if is_selecting is None:
            is_selecting = not self.is_item_selected(item)
        self.select_multiple([item], is_selecting)

    def select_multiple(self, items: Sequence[T], is_selecting: bool) -> None:
        selected = self._store.get()
        if is_selecting:
            updated = list(selected)
            for item in items:
                if not self._contains(updated, item):
                    updated.append(item)
        else:
            updated = [s for s in selected if not self._contains(items, s)]
        if len(updated) == len(selected):
            # Same membership: additions and removals both change the length.
            return
        self._write(updated)

    def select_all(self, is_selecting: bool = True) -> None:
        """Apply ``is_selecting`` to every item in the current window."""
        self.select_multiple(self._items, is_selecting)

    @property
    def are_all_selected(self) -> bool:
        selected = self._store.get()
        return bool(self._items) and all(
            self._contains(selected, item) for item in self._items
        )

    def _contains(self, pool: Sequence[T], item: T) -> bool:
        return any(self._is_equal(candidate, item) for candidate in pool)

    def _write(self, items: list[T]) -> None:
        self._store.set(items)
        logger.debug(
            "Selection written: %s item(s) (%s)",
            len(items),
            "external" if self.is_external else "local",
        )
        self.changed.emit(list(items))
