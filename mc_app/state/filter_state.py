"""Per-category filter criteria and the filtered view they produce."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Mapping, Sequence, TypeVar

from mc_app.state.base import StateEmitter
from mc_common.errors import StateContractError

logger = logging.getLogger(__name__)

T = TypeVar("T")

FilterValues = dict[str, list[str]]
ValueExtractor = Callable[[Any], Any]


class FilterType(str, Enum):
    SEARCH = "search"
    SELECT = "select"


@dataclass(frozen=True)
class FilterOption:
    key: str
    value: str


@dataclass(frozen=True)
class FilterCategory(Generic[T]):
    """Declarative description of one filterable attribute.

    Without ``get_item_value`` the item's own field named ``key`` is read.
    """

    key: str
    title: str
    type: FilterType = FilterType.SEARCH
    placeholder_text: str = ""
    select_options: tuple[FilterOption, ...] = ()
    get_item_value: Callable[[T], Any] | None = field(default=None, compare=False)

    def extractor(self) -> ValueExtractor:
        if self.get_item_value is not None:
            return self.get_item_value
        return field_extractor(self.key)


def field_extractor(key: str) -> ValueExtractor:
    def _read(item: Any) -> Any:
        if isinstance(item, Mapping):
            return item.get(key)
        return getattr(item, key, None)

    return _read


@dataclass(frozen=True)
class _Matcher:
    extract: ValueExtractor
    type: FilterType
    option_values: Mapping[str, str]

    def matches(self, item: Any, terms: Sequence[str]) -> bool:
        value = self.extract(item)
        if value is None or value == "":
            return False
        text = str(value)
        if self.type is FilterType.SELECT:
            return any(text == self.option_values.get(term, term) for term in terms)
        lowered = text.lower()
        return any(term.lower() in lowered for term in terms)


def _build_matchers(categories: Sequence[FilterCategory[Any]]) -> dict[str, _Matcher]:
    matchers: dict[str, _Matcher] = {}
    for category in categories:
        if category.key in matchers:
            raise StateContractError(
                f"Duplicate filter category key: {category.key}",
                context={"key": category.key},
            )
        matchers[category.key] = _Matcher(
            extract=category.extractor(),
            type=category.type,
            option_values={opt.key: opt.value for opt in category.select_options},
        )
    return matchers


def _normalize_values(values: Mapping[str, Sequence[str]]) -> FilterValues:
    return {key: list(terms) for key, terms in values.items() if terms}


class FilterState(Generic[T]):
    """Holds active filter terms and derives ``filtered_items``.

    Terms within a category are ORed, categories are ANDed. Filtering never
    reorders items.
    """

    def __init__(
        self, items: Sequence[T], categories: Sequence[FilterCategory[T]]
    ) -> None:
        self._items: list[T] = list(items)
        self._categories: tuple[FilterCategory[T], ...] = tuple(categories)
        self._matchers = _build_matchers(self._categories)
        self._filter_values: FilterValues = {}
        self._cache: list[T] | None = None
        self.changed: StateEmitter[FilterValues] = StateEmitter()

    @property
    def items(self) -> list[T]:
        return self._items

    @items.setter
    def items(self, value: Sequence[T]) -> None:
        self._items = list(value)
        self._cache = None

    @property
    def categories(self) -> tuple[FilterCategory[T], ...]:
        return self._categories

    @categories.setter
    def categories(self, value: Sequence[FilterCategory[T]]) -> None:
        self._categories = tuple(value)
        self._matchers = _build_matchers(self._categories)
        self._cache = None

    @property
    def filter_values(self) -> FilterValues:
        return {key: list(terms) for key, terms in self._filter_values.items()}

    @property
    def has_active_filters(self) -> bool:
        return bool(self._filter_values)

    def set_filter_values(self, values: Mapping[str, Sequence[str]]) -> None:
        """Replace all filter values at once."""
        normalized = _normalize_values(values)
        if normalized == self._filter_values:
            return
        self._filter_values = normalized
        self._cache = None
        logger.debug("Filter values replaced: %s", normalized)
        self.changed.emit(self.filter_values)

    def clear_filters(self) -> None:
        self.set_filter_values({})

    @property
    def filtered_items(self) -> list[T]:
        if self._cache is None:
            self._cache = self._apply()
        return list(self._cache)

    def _matcher_for(self, key: str) -> _Matcher:
        matcher = self._matchers.get(key)
        if matcher is None:
            matcher = _Matcher(field_extractor(key), FilterType.SEARCH, {})
            self._matchers[key] = matcher
        return matcher

    def _apply(self) -> list[T]:
        if not self._filter_values:
            return list(self._items)
        active = [
            (self._matcher_for(key), terms)
            for key, terms in self._filter_values.items()
        ]
        return [
            item
            for item in self._items
            if all(matcher.matches(item, terms) for matcher, terms in active)
        ]
