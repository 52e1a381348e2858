"""Client-side list management for the migration plan wizard."""
