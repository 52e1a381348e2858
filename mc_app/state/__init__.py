"""Composable list-state primitives: filtering, sorting, pagination, selection."""

from mc_app.state.filter_state import (
    FilterCategory,
    FilterOption,
    FilterState,
    FilterType,
    FilterValues,
)
from mc_app.state.pagination_state import PaginationProps, PaginationState
from mc_app.state.selection_state import (
    ExternalSelectionStore,
    LocalSelectionStore,
    SelectionState,
)
from mc_app.state.sort_state import SortBy, SortDirection, SortState

__all__ = [
    "ExternalSelectionStore",
    "FilterCategory",
    "FilterOption",
    "FilterState",
    "FilterType",
    "FilterValues",
    "LocalSelectionStore",
    "PaginationProps",
    "PaginationState",
    "SelectionState",
    "SortBy",
    "SortDirection",
    "SortState",
]
