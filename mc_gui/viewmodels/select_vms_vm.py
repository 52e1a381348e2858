"""ViewModel for the Select VMs step - wraps mc_app.api.SelectVMsViewModel."""

from __future__ import annotations

from typing import Any, Sequence

from PySide6.QtCore import QObject, Signal

from mc_app.api import (
    QueryResult,
    SelectVMsFormState,
    SelectVMsSnapshot,
    SelectVMsViewModel as AppSelectVMsViewModel,
    SortDirection,
    VMwareTree,
    VMwareVM,
)
from mc_common.api import ConsoleSettings


class SelectVMsQtViewModel(QObject):
    """Qt-aware wrapper around mc_app.api.SelectVMsViewModel.

    Every mutating call is forwarded to the core viewmodel and followed by a
    fresh snapshot emission.
    """

    # Signals
    snapshot_changed = Signal(object)  # SelectVMsSnapshot
    status_changed = Signal(str)  # ViewStatus value
    selection_count_changed = Signal(int)
    error_occurred = Signal(str)  # first labelled query error

    def __init__(
        self,
        form: SelectVMsFormState,
        selected_tree_nodes: Sequence[VMwareTree],
        settings: ConsoleSettings | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._app_vm = AppSelectVMsViewModel(
            form, selected_tree_nodes, settings=settings
        )
        self._snapshot: SelectVMsSnapshot = self._app_vm.snapshot()
        self._last_status = self._snapshot.status
        self._last_count = self._snapshot.selected_count

    @property
    def app_viewmodel(self) -> AppSelectVMsViewModel:
        """The wrapped UI-agnostic viewmodel."""
        return self._app_vm

    @property
    def snapshot(self) -> SelectVMsSnapshot:
        """Most recently emitted snapshot."""
        return self._snapshot

    def refresh_snapshot(self) -> None:
        """Rebuild the snapshot and emit change signals."""
        self._snapshot = self._app_vm.snapshot()
        self.snapshot_changed.emit(self._snapshot)

        if self._snapshot.status != self._last_status:
            self._last_status = self._snapshot.status
            self.status_changed.emit(self._snapshot.status.value)
            if self._snapshot.errors:
                title, message = self._snapshot.errors[0]
                self.error_occurred.emit(f"{title}: {message}")

        if self._snapshot.selected_count != self._last_count:
            self._last_count = self._snapshot.selected_count
            self.selection_count_changed.emit(self._last_count)

    # Query result slots

    def on_host_tree_result(self, result: QueryResult[VMwareTree]) -> None:
        self._app_vm.update_queries(host_tree_query=result)
        self.refresh_snapshot()

    def on_vm_tree_result(self, result: QueryResult[VMwareTree]) -> None:
        self._app_vm.update_queries(vm_tree_query=result)
        self.refresh_snapshot()

    def on_vms_result(self, result: QueryResult[list[VMwareVM]]) -> None:
        self._app_vm.update_queries(vms_query=result)
        self.refresh_snapshot()

    def set_selected_tree_nodes(self, nodes: Sequence[VMwareTree]) -> None:
        self._app_vm.set_selected_tree_nodes(nodes)
        self.refresh_snapshot()

    # Table interaction

    def set_filter_values(self, values: dict[str, list[str]]) -> None:
        self._app_vm.set_filter_values(values)
        self.refresh_snapshot()

    def clear_filters(self) -> None:
        self._app_vm.clear_filters()
        self.refresh_snapshot()

    def on_sort(self, index: int, direction: SortDirection | str) -> None:
        self._app_vm.on_sort(index, direction)
        self.refresh_snapshot()

    def set_page_number(self, page_number: int) -> None:
        self._app_vm.set_page_number(page_number)
        self.refresh_snapshot()

    def set_per_page(self, per_page: int) -> None:
        self._app_vm.set_per_page(per_page)
        self.refresh_snapshot()

    def on_select(self, row_index: int, is_selected: bool, vm: Any = None) -> None:
        self._app_vm.on_select(row_index, is_selected, vm)
        self.refresh_snapshot()

    def toggle_vm_expanded(self, vm: VMwareVM) -> None:
        self._app_vm.toggle_vm_expanded(vm)
        self.refresh_snapshot()
