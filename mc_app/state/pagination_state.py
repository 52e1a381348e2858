"""Page number / page size state and the current page slice."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from mc_app.state.base import StateEmitter
from mc_common.errors import StateContractError
from mc_common.settings import DEFAULT_PER_PAGE_OPTIONS

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class PaginationProps:
    item_count: int
    page: int
    per_page: int
    per_page_options: tuple[int, ...]

    @property
    def first_index(self) -> int:
        """1-based index of the first row shown, 0 when there are no rows."""
        if self.item_count == 0:
            return 0
        return (self.page - 1) * self.per_page + 1

    @property
    def last_index(self) -> int:
        return min(self.page * self.per_page, self.item_count)


class PaginationState(Generic[T]):
    """Slices items into pages.

    A page number past the end is kept as requested but the slice falls back
    to the last page, so a shrinking item list never yields an empty page.
    """

    def __init__(
        self,
        items: Sequence[T],
        default_per_page: int,
        per_page_options: Sequence[int] = DEFAULT_PER_PAGE_OPTIONS,
    ) -> None:
        if default_per_page <= 0:
            raise StateContractError(
                "default_per_page must be positive",
                context={"default_per_page": default_per_page},
            )
        self._items: list[T] = list(items)
        self._page_number = 1
        self._per_page = default_per_page
        self._per_page_options = tuple(sorted({*per_page_options, default_per_page}))
        self.changed: StateEmitter[PaginationProps] = StateEmitter()

    @property
    def items(self) -> list[T]:
        return self._items

    @items.setter
    def items(self, value: Sequence[T]) -> None:
        self._items = list(value)

    @property
    def page_number(self) -> int:
        return self._page_number

    @property
    def per_page(self) -> int:
        return self._per_page

    @property
    def page_count(self) -> int:
        return max(1, math.ceil(len(self._items) / self._per_page))

    @property
    def effective_page(self) -> int:
        return min(self._page_number, self.page_count)

    def set_page_number(self, page_number: int) -> None:
        page_number = max(1, int(page_number))
        if page_number == self._page_number:
            return
        self._page_number = page_number
        logger.debug("Page changed: %s", page_number)
        self.changed.emit(self.pagination_props)

    def set_per_page(self, per_page: int) -> None:
        per_page = max(1, int(per_page))
        changed = per_page != self._per_page or self._page_number != 1
        self._per_page = per_page
        self._page_number = 1
        if changed:
            logger.debug("Page size changed: %s", per_page)
            self.changed.emit(self.pagination_props)

    @property
    def current_page_items(self) -> list[T]:
        start = (self.effective_page - 1) * self._per_page
        return self._items[start : start + self._per_page]

    @property
    def pagination_props(self) -> PaginationProps:
        return PaginationProps(
            item_count=len(self._items),
            page=self.effective_page,
            per_page=self._per_page,
            per_page_options=self._per_page_options,
        )

    # Table widget callbacks
    def on_set_page(self, page_number: int) -> None:
        self.set_page_number(page_number)

    def on_per_page_select(self, per_page: int) -> None:
        self.set_per_page(per_page)
