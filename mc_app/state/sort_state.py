"""Single-column sort state and the sorted view it produces."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Sequence, TypeVar

from mc_app.state.base import StateEmitter

logger = logging.getLogger(__name__)

T = TypeVar("T")

SortValue = str | int | float | None
SortValuesGetter = Callable[[T], Sequence[SortValue]]


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


def _coerce_direction(value: SortDirection | str, fallback: SortDirection) -> SortDirection:
    if isinstance(value, SortDirection):
        return value
    try:
        return SortDirection(str(value).strip().lower())
    except ValueError:
        logger.debug("Unknown sort direction %r, keeping %s", value, fallback.value)
        return fallback


@dataclass(frozen=True)
class SortBy:
    index: int = 0
    direction: SortDirection = SortDirection.ASC


def _sort_key(value: Any) -> tuple[int, Any]:
    # Numbers before strings before missing values; mixed types never compare.
    if isinstance(value, bool):
        return (0, int(value))
    if isinstance(value, (int, float)):
        return (0, value)
    if value is None:
        return (2, "")
    return (1, str(value))


class SortState(Generic[T]):
    """Sorts items by the value at ``sort_by.index`` of ``get_sort_values``.

    The sort is stable in both directions, so ties keep their input order.
    """

    def __init__(
        self,
        items: Sequence[T],
        get_sort_values: SortValuesGetter[T],
        initial_sort: SortBy | None = None,
    ) -> None:
        self._items: list[T] = list(items)
        self._get_sort_values = get_sort_values
        self._sort_by = initial_sort or SortBy()
        self._cache: list[T] | None = None
        self.changed: StateEmitter[SortBy] = StateEmitter()

    @property
    def items(self) -> list[T]:
        return self._items

    @items.setter
    def items(self, value: Sequence[T]) -> None:
        self._items = list(value)
        self._cache = None

    @property
    def sort_by(self) -> SortBy:
        return self._sort_by

    def on_sort(self, index: int, direction: SortDirection | str) -> None:
        """Replace the sort column and direction.

        Direction strings are matched case-insensitively; an unknown one keeps
        the current direction.
        """
        resolved = _coerce_direction(direction, self._sort_by.direction)
        self._sort_by = SortBy(index=int(index), direction=resolved)
        self._cache = None
        logger.debug("Sort changed: column=%s direction=%s", index, resolved.value)
        self.changed.emit(self._sort_by)

    @property
    def sorted_items(self) -> list[T]:
        if self._cache is None:
            self._cache = self._apply()
        return list(self._cache)

    def _value(self, item: T) -> tuple[int, Any]:
        values = self._get_sort_values(item)
        index = self._sort_by.index
        value = values[index] if 0 <= index < len(values) else None
        return _sort_key(value)

    def _apply(self) -> list[T]:
        # sorted(reverse=True) keeps equal elements in their original order.
        return sorted(
            self._items,
            key=self._value,
            reverse=self._sort_by.direction is SortDirection.DESC,
        )
