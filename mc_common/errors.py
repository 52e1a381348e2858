"""Typed failures raised by migration-console.

Each error carries a ``source`` naming the layer that failed (settings,
inventory payloads, inventory queries, list state) so views can group and
label failures without matching on class names.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, TypeVar

UNEXPECTED_SOURCE = "unexpected"


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return _jsonable(value.value)
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (set, frozenset)):
        return sorted(_jsonable(item) for item in value)
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return {str(key): _jsonable(val) for key, val in context.items()}


class MCError(Exception):
    """Base error; ``context`` is normalized to JSON-friendly values."""

    source = UNEXPECTED_SOURCE

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        return error_to_payload(self)


class ConfigurationError(MCError):
    """Invalid console settings (environment or keyword arguments)."""

    source = "settings"


class InventoryQueryError(MCError):
    """An inventory query (host tree, VM tree or VM list) failed."""

    source = "inventory-query"


class InventoryDataError(MCError):
    """An inventory payload could not be parsed into models."""

    source = "inventory-data"


class StateContractError(MCError):
    """A list-state primitive was constructed with invalid arguments."""

    source = "list-state"


E = TypeVar("E", bound=MCError)


def wrap_error(
    error_cls: type[E],
    message: str,
    *,
    context: Mapping[str, Any] | None = None,
    cause: Exception | None = None,
) -> E:
    """Build ``error_cls`` chained to ``cause``, ready to raise."""
    return error_cls(message, context=context, cause=cause)


def error_to_payload(error: BaseException) -> dict[str, Any]:
    """Serializable view of any exception; non-MCError ones are 'unexpected'."""
    if isinstance(error, MCError):
        return {
            "source": error.source,
            "error_type": error.error_type,
            "message": str(error),
            "context": error.context,
        }
    return {
        "source": UNEXPECTED_SOURCE,
        "error_type": type(error).__name__,
        "message": str(error) or type(error).__name__,
        "context": {},
    }
