"""SQLite persistence helpers."""

from srcfmt.platform.db.db_manager import DatabaseManager

__all__ = ["DatabaseManager"]
