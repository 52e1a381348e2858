"""Render a Select VMs snapshot as a console table."""

from __future__ import annotations

from rich.console import Console

from mc_app.api import SelectVMsSnapshot, ViewStatus
from mc_ui.models import TableModel
from mc_ui.table_layout import build_rich_table

SELECT_COLUMN = "Sel"
EXPAND_COLUMN = ""


def snapshot_table_model(snapshot: SelectVMsSnapshot, title: str = "VMware VMs") -> TableModel:
    """Flatten a snapshot into table rows, detail rows following their VM."""
    columns = [EXPAND_COLUMN, SELECT_COLUMN, *snapshot.columns]
    rows: list[list[str]] = []
    for row in snapshot.rows:
        rows.append(
            [
                "v" if row.expanded else ">",
                "[x]" if row.selected else "[ ]",
                *row.cells,
            ]
        )
        for line in row.concerns:
            marker = "*" if line.matches_filter else ""
            rows.append(["", "", marker, line.text])

    page = snapshot.pagination
    footer = (
        f"{snapshot.selected_count} selected | "
        f"{page.first_index} - {page.last_index} of {page.item_count}"
    )
    notes = [f"{label}: {message}" for label, message in snapshot.errors]
    if snapshot.empty_state is not None and snapshot.status is ViewStatus.READY:
        notes.append(f"{snapshot.empty_state.title}. {snapshot.empty_state.body}")
    return TableModel(title=title, columns=columns, rows=rows, footer=footer, notes=notes)


class RichTablePresenter:
    def __init__(self, console: Console):
        self._console = console

    def show(self, table: TableModel) -> None:
        for note in table.notes:
            self._console.print(note)
        if not table.rows:
            return
        self._console.print(build_rich_table(table, console=self._console))

    def show_snapshot(self, snapshot: SelectVMsSnapshot) -> None:
        if snapshot.status is ViewStatus.LOADING:
            self._console.print("Loading...")
            return
        self.show(snapshot_table_model(snapshot))
