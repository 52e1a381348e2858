"""Tri-state query results and their aggregation for composite views."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Generic, Mapping, Sequence, TypeVar

from mc_common.errors import InventoryQueryError, wrap_error

T = TypeVar("T")
TItem = TypeVar("TItem")


class QueryStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    SUCCESS = "success"


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """Snapshot of one asynchronous inventory query."""

    status: QueryStatus = QueryStatus.IDLE
    data: T | None = None
    error: Any = None

    @classmethod
    def idle(cls) -> "QueryResult[T]":
        return cls(status=QueryStatus.IDLE)

    @classmethod
    def loading(cls) -> "QueryResult[T]":
        return cls(status=QueryStatus.LOADING)

    @classmethod
    def success(cls, data: T) -> "QueryResult[T]":
        return cls(status=QueryStatus.SUCCESS, data=data)

    @classmethod
    def failure(cls, error: Any) -> "QueryResult[T]":
        return cls(status=QueryStatus.ERROR, error=error)

    @property
    def is_idle(self) -> bool:
        return self.status is QueryStatus.IDLE

    @property
    def is_loading(self) -> bool:
        return self.status is QueryStatus.LOADING

    @property
    def is_error(self) -> bool:
        return self.status is QueryStatus.ERROR

    @property
    def is_success(self) -> bool:
        return self.status is QueryStatus.SUCCESS


def get_aggregate_query_status(results: Sequence[QueryResult[Any]]) -> QueryStatus:
    if any(result.is_error for result in results):
        return QueryStatus.ERROR
    if any(result.is_loading for result in results):
        return QueryStatus.LOADING
    if all(result.is_idle for result in results):
        return QueryStatus.IDLE
    if all(result.is_success for result in results):
        return QueryStatus.SUCCESS
    # Mixed idle/success: something has not been requested yet.
    return QueryStatus.ERROR


def get_first_query_error(results: Sequence[QueryResult[Any]]) -> Any:
    for result in results:
        if result.is_error:
            return result.error
    return None


def _error_message(error: Any) -> str:
    if error is None:
        return "Unknown error"
    if isinstance(error, Mapping):
        return str(error.get("message") or error)
    return str(error) or error.__class__.__name__


@dataclass(frozen=True)
class ResolvedQueries:
    """Composite state for a view that needs several queries to succeed."""

    results: tuple[QueryResult[Any], ...]
    error_titles: tuple[str, ...]

    @classmethod
    def of(
        cls, results: Sequence[QueryResult[Any]], error_titles: Sequence[str]
    ) -> "ResolvedQueries":
        return cls(tuple(results), tuple(error_titles))

    @property
    def status(self) -> QueryStatus:
        return get_aggregate_query_status(self.results)

    @property
    def is_resolved(self) -> bool:
        return self.status is QueryStatus.SUCCESS

    @property
    def first_error(self) -> Any:
        return get_first_query_error(self.results)

    @property
    def errors(self) -> list[tuple[str, str]]:
        """(title, message) for every failed query, in query order."""
        labelled: list[tuple[str, str]] = []
        for idx, result in enumerate(self.results):
            if not result.is_error:
                continue
            title = (
                self.error_titles[idx] if idx < len(self.error_titles) else "Error"
            )
            labelled.append((title, _error_message(result.error)))
        return labelled

    def raise_for_error(self) -> None:
        """Raise InventoryQueryError for the first failed query, if any."""
        errors = self.errors
        if not errors:
            return
        title, message = errors[0]
        first = self.first_error
        raise wrap_error(
            InventoryQueryError,
            f"{title}: {message}",
            context={"title": title, "failed_queries": len(errors)},
            cause=first if isinstance(first, Exception) else None,
        )

def sort_indexed_data(
    data: Mapping[str, Sequence[TItem]] | None,
    get_sort_value: Callable[[TItem], Any],
) -> dict[str, list[TItem]] | None:
    """Return a copy of a key -> items mapping with every list sorted."""
    if data is None:
        return None
    return {key: sorted(items, key=get_sort_value) for key, items in data.items()}


def _name(item: Any) -> str:
    return getattr(item, "name", "")


def sort_by_name(data: Sequence[TItem] | None) -> list[TItem] | None:
    if data is None:
        return None
    return sorted(data, key=_name)


def sort_indexed_data_by_name(
    data: Mapping[str, Sequence[TItem]] | None,
) -> dict[str, list[TItem]] | None:
    return sort_indexed_data(data, _name)


def sort_results_by_name(result: QueryResult[Sequence[TItem]]) -> QueryResult[list[TItem]]:
    return replace(result, data=sort_by_name(result.data))  # type: ignore[arg-type]
