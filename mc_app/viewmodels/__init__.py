"""UI-agnostic viewmodels for the plan wizard."""

from mc_app.viewmodels.form_state import (
    FormField,
    PlanWizardFormState,
    SelectVMsFormState,
)
from mc_app.viewmodels.select_vms import (
    COLUMN_TITLES,
    QUERY_ERROR_TITLES,
    ConcernLine,
    EmptyState,
    SelectVMsColumn,
    SelectVMsSnapshot,
    SelectVMsViewModel,
    VMRow,
    ViewStatus,
    build_candidate_vms,
    vm_is_equal,
)

__all__ = [
    "COLUMN_TITLES",
    "QUERY_ERROR_TITLES",
    "ConcernLine",
    "EmptyState",
    "FormField",
    "PlanWizardFormState",
    "SelectVMsColumn",
    "SelectVMsFormState",
    "SelectVMsSnapshot",
    "SelectVMsViewModel",
    "VMRow",
    "ViewStatus",
    "build_candidate_vms",
    "vm_is_equal",
]
