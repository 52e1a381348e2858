"""Tests for the Select VMs view composer."""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from mc_app.inventory import tree_paths
from mc_app.queries import QueryResult
from mc_app.state.sort_state import SortBy, SortDirection
from mc_app.viewmodels.form_state import PlanWizardFormState
from mc_app.viewmodels.select_vms import (
    NO_FILTER_MATCH_BODY,
    NO_VMS_IN_SCOPE_BODY,
    QUERY_ERROR_TITLES,
    SelectVMsColumn,
    SelectVMsViewModel,
    ViewStatus,
    build_candidate_vms,
)
from mc_common.settings import ConsoleSettings
from tests.helpers.inventory import host_tree, make_vm, vm_list, vm_tree


pytestmark = pytest.mark.unit_app


@pytest.fixture
def inventory():
    return host_tree(), vm_tree(), vm_list()


@pytest.fixture
def wizard() -> PlanWizardFormState:
    return PlanWizardFormState()


def _ready_vm(wizard, inventory, scope=None, settings=None) -> SelectVMsViewModel:
    hosts, folders, vms = inventory
    return SelectVMsViewModel(
        wizard.select_vms,
        scope if scope is not None else [hosts],
        QueryResult.success(hosts),
        QueryResult.success(folders),
        QueryResult.success(vms),
        settings=settings,
    )


def _names(vms) -> list[str]:
    return [vm.name for vm in vms]


def test_loading_until_all_queries_succeed(wizard, inventory) -> None:
    hosts, folders, vms = inventory
    vm = SelectVMsViewModel(wizard.select_vms, [hosts])

    assert vm.status is ViewStatus.LOADING
    assert vm.available_vms == []

    vm.update_queries(vms_query=QueryResult.success(vms))
    assert vm.status is ViewStatus.LOADING
    # Paths render blank while the trees are still loading.
    assert _names(vm.available_vms) == ["vm1", "vm2", "vm3", "vm4"]
    assert vm.snapshot().rows[0].cells[2:] == ("", "", "", "")

    vm.update_queries(
        host_tree_query=QueryResult.success(hosts),
        vm_tree_query=QueryResult.success(folders),
    )
    assert vm.status is ViewStatus.READY
    assert vm.snapshot().rows[0].cells == ("Critical", "vm1", "dc1", "C1", "h1", "vm/prod")


def test_any_query_failure_is_an_error_state(wizard, inventory) -> None:
    hosts, _, vms = inventory
    vm = SelectVMsViewModel(
        wizard.select_vms,
        [hosts],
        QueryResult.success(hosts),
        QueryResult.failure(RuntimeError("connection refused")),
        QueryResult.success(vms),
    )

    snapshot = vm.snapshot()
    assert snapshot.status is ViewStatus.ERROR
    assert snapshot.errors == [(QUERY_ERROR_TITLES[1], "connection refused")]


def test_query_failures_logged_once_when_delivered(wizard, inventory, caplog) -> None:
    hosts, _, vms = inventory
    caplog.set_level(logging.WARNING, logger="mc_app.viewmodels.select_vms")

    vm = SelectVMsViewModel(
        wizard.select_vms,
        [hosts],
        QueryResult.success(hosts),
        QueryResult.failure(RuntimeError("connection refused")),
    )
    vm.update_queries(vms_query=QueryResult.success(vms))
    vm.update_queries(host_tree_query=QueryResult.failure({"message": "timeout"}))

    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert warnings == [
        f"{QUERY_ERROR_TITLES[1]}: connection refused",
        f"{QUERY_ERROR_TITLES[0]}: timeout",
    ]
    assert len(vm.snapshot().errors) == 2


def test_candidate_set_is_union_with_selection_on_mount(wizard, inventory) -> None:
    hosts, _, vms = inventory
    vm1, vm2, _, _ = vms
    wizard.select_vms.selected_vms.set_value([vm1, vm2])
    cluster_scope = [hosts.children[0].children[0].children[0].children[1], hosts.children[0].children[1]]

    vm = _ready_vm(wizard, inventory, scope=cluster_scope)

    assert _names(vm.selected_vms_on_mount) == ["vm1", "vm2"]
    assert _names(vm.available_vms) == ["vm1", "vm2", "vm3"]


def test_build_candidate_vms_deduplicates_by_link() -> None:
    a, b, c = make_vm("a"), make_vm("b"), make_vm("c")

    candidates = build_candidate_vms([a, b], [make_vm("b"), c])

    assert candidates == [a, b, c]
    assert candidates[1] is b


def test_filter_sort_paginate_example(wizard) -> None:
    hosts = host_tree()
    vms = [
        make_vm("vm1", ("Critical", "Shared disk", "Not supported")),
        make_vm("vm3"),
    ]
    vm = _ready_vm(wizard, (hosts, vm_tree(), vms))

    vm.set_filter_values({"migrationAnalysis": ["Critical"]})
    assert _names(vm.filtered_items) == ["vm1"]

    vm.on_sort(SelectVMsColumn.NAME, SortDirection.ASC)
    assert _names(vm.sorted_items) == ["vm1"]
    assert vm.pagination_props.per_page == 10
    assert _names(vm.current_page_items) == ["vm1"]


def test_default_sort_is_vm_name_ascending(wizard, inventory) -> None:
    hosts, folders, vms = inventory
    vm = _ready_vm(wizard, (hosts, folders, list(reversed(vms))))

    assert vm.sort_by == SortBy(SelectVMsColumn.NAME, SortDirection.ASC)
    assert _names(vm.sorted_items) == ["vm1", "vm2", "vm3", "vm4"]


def test_sort_by_path_column_descending(wizard, inventory) -> None:
    vm = _ready_vm(wizard, inventory)

    vm.on_sort(SelectVMsColumn.CLUSTER, SortDirection.DESC)

    # vm4 has no cluster; vm1 and vm2 tie on C1 and keep their order.
    assert _names(vm.sorted_items) == ["vm3", "vm1", "vm2", "vm4"]


def test_page_resets_to_one_on_every_sort_change(wizard, inventory) -> None:
    vm = _ready_vm(wizard, inventory, settings=ConsoleSettings(default_per_page=1))
    vm.set_page_number(3)
    assert vm.page_number == 3

    vm.on_sort(SelectVMsColumn.HOST, SortDirection.ASC)
    assert vm.page_number == 1

    vm.set_page_number(2)
    vm.on_sort(SelectVMsColumn.HOST, SortDirection.ASC)
    assert vm.page_number == 1


def test_filters_use_resolved_paths(wizard, inventory) -> None:
    vm = _ready_vm(wizard, inventory)

    vm.set_filter_values({"dataCenter": ["DC2"]})
    assert _names(vm.filtered_items) == ["vm4"]

    vm.set_filter_values({"folderPath": ["vm/"]})
    assert _names(vm.filtered_items) == ["vm1", "vm3"]

    vm.set_filter_values({"cluster": ["c1"], "name": ["2"]})
    assert _names(vm.filtered_items) == ["vm2"]


def test_toggle_selected_twice_stores_vm_once(wizard, inventory) -> None:
    vm = _ready_vm(wizard, inventory)
    vm1 = vm.available_vms[0]

    vm.toggle_vm_selected(vm1, True)
    vm.toggle_vm_selected(vm1, True)

    assert vm.is_vm_selected(vm1)
    assert wizard.select_vms.selected_vms.value == [vm1]
    assert vm.snapshot().selected_count == 1


def test_selection_survives_paging(wizard, inventory) -> None:
    vm = _ready_vm(wizard, inventory, settings=ConsoleSettings(default_per_page=2))
    first = vm.current_page_items[0]
    vm.on_select(0, True, first)

    vm.set_page_number(2)
    assert first not in vm.current_page_items
    vm.set_page_number(1)

    assert vm.snapshot().rows[0].selected


def test_selection_survives_filtering_and_refetch(wizard, inventory) -> None:
    vm = _ready_vm(wizard, inventory)
    vm.toggle_vm_selected(vm.available_vms[0], True)

    vm.set_filter_values({"name": ["vm3"]})
    vm.update_queries(vms_query=QueryResult.success(vm_list()))
    vm.clear_filters()

    # The refetched vm1 is a different object with the same self link.
    refetched = next(v for v in vm.available_vms if v.name == "vm1")
    assert vm.is_vm_selected(refetched)


def test_header_checkbox_selects_filtered_items_only(wizard, inventory) -> None:
    vm = _ready_vm(wizard, inventory)
    vm.set_filter_values({"cluster": ["C1"]})

    vm.on_select(-1, True)
    assert _names(wizard.select_vms.selected_vms.value) == ["vm1", "vm2"]
    assert vm.are_all_selected

    vm.clear_filters()
    vm.toggle_vm_selected(vm.available_vms[3], True)
    vm.set_filter_values({"cluster": ["C1"]})
    vm.on_select(-1, False)
    assert _names(wizard.select_vms.selected_vms.value) == ["vm4"]


def test_condition_filter_expands_first_match(wizard, inventory) -> None:
    vm = _ready_vm(wizard, inventory)
    vm2 = vm.available_vms[1]
    vm.toggle_vm_expanded(vm2)

    vm.set_filter_values({"analysisCondition": ["snapshot"]})

    expanded = [row.vm.name for row in vm.snapshot().rows if row.expanded]
    assert expanded == ["vm3"]
    assert vm.is_vm_expanded(vm2)
    row = next(r for r in vm.snapshot().rows if r.vm.name == "vm3")
    assert [line.matches_filter for line in row.concerns] == [False, True]


def test_condition_expansion_only_on_condition_change(wizard, inventory) -> None:
    vm = _ready_vm(wizard, inventory)
    vm.set_filter_values({"analysisCondition": ["usb"]})
    vm3 = next(v for v in vm.available_vms if v.name == "vm3")
    assert vm.is_vm_expanded(vm3)

    vm.toggle_vm_expanded(vm3)
    vm.set_filter_values({"analysisCondition": ["usb"], "name": ["vm"]})
    assert not vm.is_vm_expanded(vm3)

    vm.set_filter_values({"analysisCondition": ["passthrough"], "name": ["vm"]})
    assert vm.is_vm_expanded(vm3)


def test_expansion_dropped_when_vm_leaves_candidates(wizard, inventory) -> None:
    hosts, _, _ = inventory
    vm = _ready_vm(wizard, inventory)
    vm4 = vm.available_vms[3]
    vm.toggle_vm_expanded(vm4)

    vm.set_selected_tree_nodes([hosts.children[0]])
    assert vm4 not in vm.available_vms
    vm.set_selected_tree_nodes([hosts])

    assert not vm.is_vm_expanded(vm4)


def test_candidates_recomputed_only_when_inputs_change(wizard, inventory) -> None:
    hosts, folders, vms = inventory
    with patch(
        "mc_app.viewmodels.select_vms.get_vm_tree_path_info_by_vm",
        wraps=tree_paths.get_vm_tree_path_info_by_vm,
    ) as resolver:
        vm = _ready_vm(wizard, inventory)
        vm.update_queries(vms_query=QueryResult.success(vms))
        vm.set_filter_values({"name": ["vm"]})
        assert resolver.call_count == 1

        vm.update_queries(vms_query=QueryResult.success(list(vms)))
        assert resolver.call_count == 2


def test_empty_states(wizard, inventory) -> None:
    hosts, folders, _ = inventory
    vm = _ready_vm(wizard, (hosts, folders, []))
    assert vm.snapshot().empty_state.body == NO_VMS_IN_SCOPE_BODY

    vm.update_queries(vms_query=QueryResult.success(vm_list()))
    assert vm.snapshot().empty_state is None

    vm.set_filter_values({"name": ["nothing-matches"]})
    snapshot = vm.snapshot()
    assert snapshot.empty_state.body == NO_FILTER_MATCH_BODY
    assert snapshot.rows == []
    assert snapshot.filtered_count == 0
    assert snapshot.available_count == 4
