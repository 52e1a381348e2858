"""Public API surface for mc_app."""

from mc_app.inventory.concerns import (
    VMConcernStatus,
    get_most_severe_vm_concern,
    get_vm_concern_status,
    get_vm_concern_status_label,
    vm_concerns_text,
    vm_matches_concern_filter,
)
from mc_app.inventory.models import (
    VMConcern,
    VMwareTree,
    VMwareTreeKind,
    VMwareTreeObject,
    VMwareTreeType,
    VMwareVM,
    parse_tree,
    parse_vms,
)
from mc_app.inventory.scope import get_available_vms
from mc_app.inventory.tree_paths import TreePathInfo, get_vm_tree_path_info_by_vm
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
from mc_app.state import (
    FilterCategory,
    FilterOption,
    FilterState,
    FilterType,
    PaginationProps,
    PaginationState,
    SelectionState,
    SortBy,
    SortDirection,
    SortState,
)
from mc_app.viewmodels import (
    FormField,
    PlanWizardFormState,
    SelectVMsColumn,
    SelectVMsFormState,
    SelectVMsSnapshot,
    SelectVMsViewModel,
    VMRow,
    ViewStatus,
)

__all__ = [
    "FilterCategory",
    "FilterOption",
    "FilterState",
    "FilterType",
    "FormField",
    "PaginationProps",
    "PaginationState",
    "PlanWizardFormState",
    "QueryResult",
    "QueryStatus",
    "ResolvedQueries",
    "SelectVMsColumn",
    "SelectVMsFormState",
    "SelectVMsSnapshot",
    "SelectVMsViewModel",
    "SelectionState",
    "SortBy",
    "SortDirection",
    "SortState",
    "TreePathInfo",
    "VMConcern",
    "VMConcernStatus",
    "VMRow",
    "VMwareTree",
    "VMwareTreeKind",
    "VMwareTreeObject",
    "VMwareTreeType",
    "VMwareVM",
    "ViewStatus",
    "get_aggregate_query_status",
    "get_available_vms",
    "get_first_query_error",
    "get_most_severe_vm_concern",
    "get_vm_concern_status",
    "get_vm_concern_status_label",
    "get_vm_tree_path_info_by_vm",
    "parse_tree",
    "parse_vms",
    "sort_by_name",
    "sort_indexed_data_by_name",
    "sort_results_by_name",
    "vm_concerns_text",
    "vm_matches_concern_filter",
]
