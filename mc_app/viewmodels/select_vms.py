"""View composer for the "Select VMs" wizard step (UI-agnostic).

Pipeline: candidate VMs -> path info -> filter -> sort -> paginate -> rows.
Selection is bound to the wizard form; row expansion is local to the view.
Observed effects:

* every sort change resets the page number to 1;
* a change of the analysis-condition filter expands the first sorted VM whose
  concerns match it (never collapses other rows).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Sequence

from mc_app.inventory.concerns import (
    CONCERN_STATUS_LABELS,
    concern_matches_filter,
    get_most_severe_vm_concern,
    get_vm_concern_status_label,
    vm_concern_text,
    vm_concerns_text,
    vm_matches_concern_filter,
)
from mc_app.inventory.models import VMwareTree, VMwareVM
from mc_app.inventory.scope import get_available_vms
from mc_app.inventory.tree_paths import (
    EMPTY_PATH_INFO,
    TreePathInfo,
    get_vm_tree_path_info_by_vm,
)
from mc_app.queries import QueryResult, QueryStatus, ResolvedQueries
from mc_app.state.filter_state import (
    FilterCategory,
    FilterOption,
    FilterState,
    FilterType,
    FilterValues,
)
from mc_app.state.pagination_state import PaginationProps, PaginationState
from mc_app.state.selection_state import SelectionState
from mc_app.state.sort_state import SortBy, SortDirection, SortState
from mc_app.viewmodels.form_state import SelectVMsFormState
from mc_common.settings import ConsoleSettings

logger = logging.getLogger(__name__)

QUERY_ERROR_TITLES = (
    "Error loading VMware host tree data",
    "Error loading VMware VM tree data",
    "Error loading VMs",
)

NO_VMS_TITLE = "No VMs found"
NO_VMS_IN_SCOPE_BODY = (
    "No results match your filter. Go back and make a different selection."
)
NO_FILTER_MATCH_BODY = "No results match your filter."

ANALYSIS_CONDITION_KEY = "analysisCondition"


class SelectVMsColumn(IntEnum):
    """Sort-value positions; the first two and the last are not sortable."""

    EXPAND = 0
    SELECT = 1
    MIGRATION_ANALYSIS = 2
    NAME = 3
    DATACENTER = 4
    CLUSTER = 5
    HOST = 6
    FOLDER_PATH = 7
    ACTIONS = 8


COLUMN_TITLES = (
    "Migration analysis",
    "VM name",
    "Datacenter",
    "Cluster",
    "Host",
    "Folder path",
)


class ViewStatus(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


@dataclass(frozen=True)
class ConcernLine:
    category: str
    text: str
    matches_filter: bool = False


@dataclass(frozen=True)
class VMRow:
    vm: VMwareVM
    cells: tuple[str, ...]
    selected: bool
    expanded: bool
    concerns: tuple[ConcernLine, ...] = ()


@dataclass(frozen=True)
class EmptyState:
    title: str
    body: str


@dataclass(frozen=True)
class SelectVMsSnapshot:
    status: ViewStatus
    errors: list[tuple[str, str]]
    columns: tuple[str, ...]
    rows: list[VMRow]
    empty_state: EmptyState | None
    sort_by: SortBy
    pagination: PaginationProps
    filter_values: FilterValues
    selected_count: int
    available_count: int
    filtered_count: int


def vm_is_equal(a: VMwareVM, b: VMwareVM) -> bool:
    return a.self_link == b.self_link


def _log_query_failures(results: Sequence[QueryResult[Any] | None]) -> None:
    """Log failures among freshly delivered results; None means not delivered."""
    delivered = [
        (result, title)
        for result, title in zip(results, QUERY_ERROR_TITLES)
        if result is not None
    ]
    resolved = ResolvedQueries.of(
        [result for result, _ in delivered], [title for _, title in delivered]
    )
    for title, message in resolved.errors:
        logger.warning("%s: %s", title, message)


def build_candidate_vms(
    selected_on_mount: Sequence[VMwareVM], scope_vms: Sequence[VMwareVM]
) -> list[VMwareVM]:
    """Previously selected VMs first, then scope VMs not already among them."""
    seen = {vm.self_link for vm in selected_on_mount}
    candidates = list(selected_on_mount)
    for vm in scope_vms:
        if vm.self_link not in seen:
            seen.add(vm.self_link)
            candidates.append(vm)
    return candidates


class SelectVMsViewModel:
    """Derives the interactive VM table for the wizard's VM selection step."""

    def __init__(
        self,
        form: SelectVMsFormState,
        selected_tree_nodes: Sequence[VMwareTree],
        host_tree_query: QueryResult[VMwareTree] | None = None,
        vm_tree_query: QueryResult[VMwareTree] | None = None,
        vms_query: QueryResult[list[VMwareVM]] | None = None,
        *,
        settings: ConsoleSettings | None = None,
    ) -> None:
        self._form = form
        self._settings = settings or ConsoleSettings()
        self._selected_tree_nodes: Sequence[VMwareTree] = selected_tree_nodes
        self._host_tree_query = host_tree_query or QueryResult.loading()
        self._vm_tree_query = vm_tree_query or QueryResult.loading()
        self._vms_query = vms_query or QueryResult.loading()
        _log_query_failures((host_tree_query, vm_tree_query, vms_query))

        # Selected VMs stay listed even if they fall outside the current scope.
        self._selected_vms_on_mount: list[VMwareVM] = list(form.selected_vms.value)

        self._memo_inputs: tuple[Any, ...] | None = None
        self._available_vms: list[VMwareVM] = []
        self._tree_path_info: dict[str, TreePathInfo] = {}
        self._analysis_condition: list[str] | None = None

        self.filter_categories = self._build_filter_categories()
        self._filter: FilterState[VMwareVM] = FilterState([], self.filter_categories)
        self._sort: SortState[VMwareVM] = SortState(
            [],
            self.get_sort_values,
            SortBy(index=int(SelectVMsColumn.NAME), direction=SortDirection.ASC),
        )
        self._pagination: PaginationState[VMwareVM] = PaginationState(
            [],
            self._settings.default_per_page,
            self._settings.per_page_options,
        )
        self._selection: SelectionState[VMwareVM] = SelectionState(
            [],
            vm_is_equal,
            external_state=form.selected_vms.binding(),
        )
        self._expansion: SelectionState[VMwareVM] = SelectionState(
            [], vm_is_equal, prune_missing=True
        )

        self._sort.changed.subscribe(self._on_sort_changed)
        self._filter.changed.subscribe(self._on_filter_changed)

        self._recompute_candidates()

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------
    def update_queries(
        self,
        *,
        host_tree_query: QueryResult[VMwareTree] | None = None,
        vm_tree_query: QueryResult[VMwareTree] | None = None,
        vms_query: QueryResult[list[VMwareVM]] | None = None,
    ) -> None:
        """Replace any of the three inventory query results."""
        if host_tree_query is not None:
            self._host_tree_query = host_tree_query
        if vm_tree_query is not None:
            self._vm_tree_query = vm_tree_query
        if vms_query is not None:
            self._vms_query = vms_query
        _log_query_failures((host_tree_query, vm_tree_query, vms_query))
        self._recompute_candidates()

    def set_selected_tree_nodes(self, nodes: Sequence[VMwareTree]) -> None:
        self._selected_tree_nodes = nodes
        self._recompute_candidates()

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------
    @property
    def resolved_queries(self) -> ResolvedQueries:
        return ResolvedQueries.of(
            [self._host_tree_query, self._vm_tree_query, self._vms_query],
            QUERY_ERROR_TITLES,
        )

    @property
    def status(self) -> ViewStatus:
        status = self.resolved_queries.status
        if status is QueryStatus.ERROR:
            return ViewStatus.ERROR
        if status is QueryStatus.SUCCESS:
            return ViewStatus.READY
        return ViewStatus.LOADING

    @property
    def selected_vms_on_mount(self) -> list[VMwareVM]:
        return list(self._selected_vms_on_mount)

    @property
    def available_vms(self) -> list[VMwareVM]:
        return list(self._available_vms)

    @property
    def tree_path_info_by_vm(self) -> dict[str, TreePathInfo]:
        return self._tree_path_info

    @property
    def filter_values(self) -> FilterValues:
        return self._filter.filter_values

    @property
    def filtered_items(self) -> list[VMwareVM]:
        return self._filter.filtered_items

    @property
    def sort_by(self) -> SortBy:
        return self._sort.sort_by

    @property
    def sorted_items(self) -> list[VMwareVM]:
        return self._sort.sorted_items

    @property
    def page_number(self) -> int:
        return self._pagination.page_number

    @property
    def current_page_items(self) -> list[VMwareVM]:
        return self._pagination.current_page_items

    @property
    def pagination_props(self) -> PaginationProps:
        return self._pagination.pagination_props

    @property
    def selected_count(self) -> int:
        return len(self._form.selected_vms.value)

    def path_info(self, vm: VMwareVM) -> TreePathInfo:
        return self._tree_path_info.get(vm.self_link, EMPTY_PATH_INFO)

    def is_vm_selected(self, vm: VMwareVM) -> bool:
        return self._selection.is_item_selected(vm)

    def is_vm_expanded(self, vm: VMwareVM) -> bool:
        return self._expansion.is_item_selected(vm)

    @property
    def are_all_selected(self) -> bool:
        return self._selection.are_all_selected

    def get_sort_values(self, vm: VMwareVM) -> list[str]:
        info = self.path_info(vm)
        return [
            "",
            "",
            get_vm_concern_status_label(get_most_severe_vm_concern(vm)),
            vm.name,
            info.datacenter_name,
            info.cluster_name,
            info.host_name,
            info.folder_path,
            "",
        ]

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------
    def set_filter_values(self, values: FilterValues) -> None:
        self._filter.set_filter_values(values)

    def clear_filters(self) -> None:
        self._filter.clear_filters()

    def on_sort(self, index: int, direction: SortDirection | str) -> None:
        self._sort.on_sort(index, direction)

    def set_page_number(self, page_number: int) -> None:
        self._pagination.set_page_number(page_number)

    def set_per_page(self, per_page: int) -> None:
        self._pagination.set_per_page(per_page)

    def on_select(
        self, row_index: int, is_selected: bool, vm: VMwareVM | None = None
    ) -> None:
        """Table checkbox callback; row index -1 is the header checkbox."""
        if row_index == -1:
            self.select_all(is_selected)
        elif vm is not None:
            self.toggle_vm_selected(vm, is_selected)

    def select_all(self, is_selected: bool = True) -> None:
        self._selection.select_all(is_selected)

    def toggle_vm_selected(self, vm: VMwareVM, is_selected: bool | None = None) -> None:
        self._selection.toggle_item_selected(vm, is_selected)

    def toggle_vm_expanded(self, vm: VMwareVM) -> None:
        self._expansion.toggle_item_selected(vm)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def snapshot(self) -> SelectVMsSnapshot:
        filtered = self._filter.filtered_items
        empty_state = None
        if not self._available_vms:
            empty_state = EmptyState(NO_VMS_TITLE, NO_VMS_IN_SCOPE_BODY)
        elif not filtered:
            empty_state = EmptyState(NO_VMS_TITLE, NO_FILTER_MATCH_BODY)

        return SelectVMsSnapshot(
            status=self.status,
            errors=self.resolved_queries.errors,
            columns=COLUMN_TITLES,
            rows=[self._build_row(vm) for vm in self.current_page_items],
            empty_state=empty_state,
            sort_by=self.sort_by,
            pagination=self.pagination_props,
            filter_values=self.filter_values,
            selected_count=self.selected_count,
            available_count=len(self._available_vms),
            filtered_count=len(filtered),
        )

    def _build_row(self, vm: VMwareVM) -> VMRow:
        info = self.path_info(vm)
        expanded = self.is_vm_expanded(vm)
        concerns: tuple[ConcernLine, ...] = ()
        if expanded:
            filter_text = self._analysis_condition_text()
            concerns = tuple(
                ConcernLine(
                    category=concern.category,
                    text=vm_concern_text(concern),
                    matches_filter=concern_matches_filter(concern, filter_text),
                )
                for concern in vm.concerns
            )
        return VMRow(
            vm=vm,
            cells=(
                get_vm_concern_status_label(get_most_severe_vm_concern(vm)),
                vm.name,
                info.datacenter_name,
                info.cluster_name,
                info.host_name,
                info.folder_path,
            ),
            selected=self.is_vm_selected(vm),
            expanded=expanded,
            concerns=concerns,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _build_filter_categories(self) -> list[FilterCategory[VMwareVM]]:
        return [
            FilterCategory(
                key="name",
                title="VM name",
                type=FilterType.SEARCH,
                placeholder_text="Filter by VM ...",
            ),
            FilterCategory(
                key="migrationAnalysis",
                title="Migration analysis",
                type=FilterType.SELECT,
                select_options=tuple(
                    FilterOption(key=label, value=label)
                    for label in CONCERN_STATUS_LABELS
                ),
                get_item_value=lambda vm: get_vm_concern_status_label(
                    get_most_severe_vm_concern(vm)
                ),
            ),
            FilterCategory(
                key=ANALYSIS_CONDITION_KEY,
                title="Analysis condition",
                type=FilterType.SEARCH,
                placeholder_text="Filter by analysis condition...",
                get_item_value=vm_concerns_text,
            ),
            FilterCategory(
                key="dataCenter",
                title="Datacenter",
                type=FilterType.SEARCH,
                placeholder_text="Filter by datacenter ...",
                get_item_value=lambda vm: self.path_info(vm).datacenter_name,
            ),
            FilterCategory(
                key="cluster",
                title="Cluster",
                type=FilterType.SEARCH,
                placeholder_text="Filter by cluster ...",
                get_item_value=lambda vm: self.path_info(vm).cluster_name,
            ),
            FilterCategory(
                key="host",
                title="Host",
                type=FilterType.SEARCH,
                placeholder_text="Filter by hostname...",
                get_item_value=lambda vm: self.path_info(vm).host_name,
            ),
            FilterCategory(
                key="folderPath",
                title="Folder path",
                type=FilterType.SEARCH,
                placeholder_text="Filter by folder path ...",
                get_item_value=lambda vm: self.path_info(vm).folder_path,
            ),
        ]

    def _recompute_candidates(self) -> None:
        inputs = (
            self._selected_tree_nodes,
            self._vms_query.data,
            self._host_tree_query.data,
            self._vm_tree_query.data,
        )
        if self._memo_inputs is not None and all(
            new is old for new, old in zip(inputs, self._memo_inputs)
        ):
            return
        self._memo_inputs = inputs

        scope_vms = get_available_vms(
            self._selected_tree_nodes, self._vms_query.data or []
        )
        self._available_vms = build_candidate_vms(self._selected_vms_on_mount, scope_vms)
        self._tree_path_info = get_vm_tree_path_info_by_vm(
            self._available_vms,
            self._host_tree_query.data,
            self._vm_tree_query.data,
            separator=self._settings.folder_path_separator,
        )
        logger.debug(
            "Candidate VMs recomputed: %s in scope, %s total",
            len(scope_vms),
            len(self._available_vms),
        )

        self._filter.items = self._available_vms
        self._expansion.items = self._available_vms
        self._propagate()

    def _propagate(self) -> None:
        self._sort.items = self._filter.filtered_items
        sorted_items = self._sort.sorted_items
        self._pagination.items = sorted_items
        self._selection.items = sorted_items

    def _on_sort_changed(self, _sort_by: SortBy) -> None:
        self._propagate()
        self._pagination.set_page_number(1)

    def _on_filter_changed(self, values: FilterValues) -> None:
        self._propagate()
        condition = values.get(ANALYSIS_CONDITION_KEY)
        if condition == self._analysis_condition:
            return
        self._analysis_condition = condition
        if condition:
            self._expand_first_concern_match(condition[0])

    def _analysis_condition_text(self) -> str:
        condition = self._filter.filter_values.get(ANALYSIS_CONDITION_KEY)
        return condition[0] if condition else ""

    def _expand_first_concern_match(self, filter_text: str) -> None:
        match = next(
            (
                vm
                for vm in self._sort.sorted_items
                if vm_matches_concern_filter(vm, filter_text)
            ),
            None,
        )
        if match is not None and not self.is_vm_expanded(match):
            logger.debug("Expanding %s for condition %r", match.name, filter_text)
            self._expansion.toggle_item_selected(match, True)
