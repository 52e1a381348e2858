"""Pytest configuration for mc_gui tests."""

from pathlib import Path

from tests.helpers.optional_imports import module_available

HAS_PYSIDE6 = module_available("PySide6")

# Skip collection of test files if the GUI extra is not installed.
if not HAS_PYSIDE6:
    collect_ignore = [path.name for path in Path(__file__).parent.glob("test_*.py")]
