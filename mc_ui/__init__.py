"""Console rendering for migration-console views."""

from mc_ui.models import TableModel
from mc_ui.select_vms_table import RichTablePresenter, snapshot_table_model
from mc_ui.table_layout import build_rich_table

__all__ = ["RichTablePresenter", "TableModel", "build_rich_table", "snapshot_table_model"]
