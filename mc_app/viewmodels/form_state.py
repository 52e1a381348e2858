"""Wizard-level form state that outlives individual step views."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Generic, Sequence, TypeVar

from mc_app.inventory.models import VMwareVM

T = TypeVar("T")


class FormField(Generic[T]):
    """A single form value with replace-wholesale write semantics."""

    def __init__(self, initial: T) -> None:
        self._initial = initial
        self._value = initial
        self._listeners: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    @property
    def is_dirty(self) -> bool:
        return self._value != self._initial

    def set_value(self, value: T) -> None:
        self._value = value
        for listener in list(self._listeners):
            listener(value)

    def reset(self) -> None:
        self.set_value(self._initial)

    def on_change(self, listener: Callable[[T], None]) -> None:
        self._listeners.append(listener)

    def binding(self) -> tuple[Callable[[], T], Callable[[T], None]]:
        """Return a ``(get_value, set_value)`` pair for external stores."""
        return (lambda: self._value), self.set_value


def _empty_vms() -> FormField[Sequence[VMwareVM]]:
    return FormField([])


@dataclass
class SelectVMsFormState:
    selected_vms: FormField[Sequence[VMwareVM]] = field(default_factory=_empty_vms)

    @property
    def is_valid(self) -> bool:
        return len(self.selected_vms.value) > 0


@dataclass
class PlanWizardFormState:
    select_vms: SelectVMsFormState = field(default_factory=SelectVMsFormState)
