"""Shared helpers for migration-console."""

from mc_common.api import ConsoleSettings, MCError, configure_logging

__all__ = ["ConsoleSettings", "MCError", "configure_logging"]
