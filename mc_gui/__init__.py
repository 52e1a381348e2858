"""PySide6 adapters for the migration console."""
