"""Migration-analysis concern helpers."""

from __future__ import annotations

from enum import Enum

from mc_app.inventory.models import VMConcern, VMConcernCategory, VMwareVM

CONCERN_TEXT_SEPARATOR = " ; "

_ADVISORY_CATEGORIES = {
    VMConcernCategory.INFORMATION.value,
    VMConcernCategory.ADVISORY.value,
}


class VMConcernStatus(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    OK = "ok"


_STATUS_LABELS = {
    VMConcernStatus.ERROR: "Critical",
    VMConcernStatus.WARNING: "Warning",
    VMConcernStatus.INFO: "Advisory",
    VMConcernStatus.OK: "Ok",
}

CONCERN_STATUS_LABELS: tuple[str, ...] = ("Ok", "Advisory", "Warning", "Critical")


def get_most_severe_vm_concern(vm: VMwareVM) -> VMConcern | None:
    """Return the first concern of the highest severity present, if any."""
    if not vm.concerns:
        return None
    for categories in (
        {VMConcernCategory.CRITICAL.value},
        {VMConcernCategory.WARNING.value},
        _ADVISORY_CATEGORIES,
    ):
        match = next((c for c in vm.concerns if c.category in categories), None)
        if match is not None:
            return match
    return None


def get_vm_concern_status(concern: VMConcern | None) -> VMConcernStatus:
    if concern is None:
        return VMConcernStatus.OK
    if concern.category == VMConcernCategory.CRITICAL.value:
        return VMConcernStatus.ERROR
    if concern.category == VMConcernCategory.WARNING.value:
        return VMConcernStatus.WARNING
    if concern.category in _ADVISORY_CATEGORIES:
        return VMConcernStatus.INFO
    return VMConcernStatus.OK


def get_vm_concern_status_label(concern: VMConcern | None) -> str:
    return _STATUS_LABELS[get_vm_concern_status(concern)]


def vm_concern_text(concern: VMConcern) -> str:
    return f"{concern.category} - {concern.label}: {concern.assessment}"


def vm_concerns_text(vm: VMwareVM) -> str:
    """All concerns of a VM as one continuous searchable string."""
    return CONCERN_TEXT_SEPARATOR.join(vm_concern_text(c) for c in vm.concerns)


def concern_matches_filter(concern: VMConcern, filter_text: str) -> bool:
    if not filter_text:
        return False
    return filter_text.lower() in vm_concern_text(concern).lower()


def vm_matches_concern_filter(vm: VMwareVM, filter_text: str) -> bool:
    return any(concern_matches_filter(c, filter_text) for c in vm.concerns)
