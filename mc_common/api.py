"""Public API surface for mc_common."""

from mc_common.config.env import parse_bool_env, parse_int_env
from mc_common.errors import (
    ConfigurationError,
    InventoryDataError,
    InventoryQueryError,
    MCError,
    StateContractError,
    error_to_payload,
    wrap_error,
)
from mc_common.logging import configure_logging
from mc_common.settings import ConsoleSettings

__all__ = [
    "ConfigurationError",
    "ConsoleSettings",
    "InventoryDataError",
    "InventoryQueryError",
    "MCError",
    "StateContractError",
    "configure_logging",
    "error_to_payload",
    "parse_bool_env",
    "parse_int_env",
    "wrap_error",
]
