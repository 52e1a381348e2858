"""Tests for query aggregation helpers."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from mc_app.queries import (
    QueryResult,
    QueryStatus,
    ResolvedQueries,
    get_aggregate_query_status,
    get_first_query_error,
    sort_by_name,
    sort_indexed_data_by_name,
    sort_results_by_name,
)
from mc_common.errors import InventoryQueryError


pytestmark = pytest.mark.unit_app


def _named(*names: str) -> list[SimpleNamespace]:
    return [SimpleNamespace(name=name) for name in names]


@pytest.mark.parametrize(
    ("results", "expected"),
    [
        ([QueryResult.success(1), QueryResult.failure("x"), QueryResult.loading()], QueryStatus.ERROR),
        ([QueryResult.success(1), QueryResult.loading()], QueryStatus.LOADING),
        ([QueryResult.idle(), QueryResult.idle()], QueryStatus.IDLE),
        ([QueryResult.success(1), QueryResult.success(2)], QueryStatus.SUCCESS),
        ([QueryResult.success(1), QueryResult.idle()], QueryStatus.ERROR),
    ],
)
def test_aggregate_status(results, expected) -> None:
    assert get_aggregate_query_status(results) is expected


def test_first_error_in_query_order() -> None:
    results = [QueryResult.success(1), QueryResult.failure("first"), QueryResult.failure("second")]

    assert get_first_query_error(results) == "first"
    assert get_first_query_error([QueryResult.success(1)]) is None


def test_resolved_queries_label_every_failure() -> None:
    resolved = ResolvedQueries.of(
        [
            QueryResult.failure({"message": "host tree timeout"}),
            QueryResult.success({}),
            QueryResult.failure(RuntimeError("403 Forbidden")),
        ],
        ["Host tree", "VM tree", "VMs"],
    )

    assert resolved.status is QueryStatus.ERROR
    assert not resolved.is_resolved
    assert resolved.first_error == {"message": "host tree timeout"}
    assert resolved.errors == [
        ("Host tree", "host tree timeout"),
        ("VMs", "403 Forbidden"),
    ]


def test_raise_for_error_uses_first_failure() -> None:
    cause = RuntimeError("403 Forbidden")
    resolved = ResolvedQueries.of(
        [QueryResult.success({}), QueryResult.failure(cause), QueryResult.failure("later")],
        ["Host tree", "VM tree", "VMs"],
    )

    with pytest.raises(InventoryQueryError) as excinfo:
        resolved.raise_for_error()

    assert str(excinfo.value) == "VM tree: 403 Forbidden"
    assert excinfo.value.context == {"title": "VM tree", "failed_queries": 2}
    assert excinfo.value.__cause__ is cause

    ResolvedQueries.of([QueryResult.success(1)], ["VMs"]).raise_for_error()


def test_sort_helpers_return_sorted_copies() -> None:
    data = _named("b", "c", "a")

    assert [item.name for item in sort_by_name(data)] == ["a", "b", "c"]
    assert [item.name for item in data] == ["b", "c", "a"]
    assert sort_by_name(None) is None

    indexed = sort_indexed_data_by_name({"p1": _named("z", "y"), "p2": []})
    assert [item.name for item in indexed["p1"]] == ["y", "z"]
    assert indexed["p2"] == []

    result = sort_results_by_name(QueryResult.success(_named("b", "a")))
    assert result.is_success
    assert [item.name for item in result.data] == ["a", "b"]
