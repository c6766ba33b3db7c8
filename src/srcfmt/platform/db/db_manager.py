"""SQLite access for the persisted file hash table."""

import sqlite3
from collections.abc import Iterable
from pathlib import Path
from typing import Any, final

from srcfmt.platform.filesystem import ensure_parent_directory
from srcfmt.platform.logging import logger

_SCHEMA = """
CREATE TABLE IF NOT EXISTS file_hashes (
    relative_path TEXT PRIMARY KEY,
    formatted_hash TEXT NOT NULL,
    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
)
"""


@final
class DatabaseManager:
    """Owns one SQLite connection to the ``file_hashes`` table."""

    db_path: str | Path
    conn: sqlite3.Connection | None

    def __init__(self, db_path: Path | str) -> None:
        """Initialize database manager.

        Args:
            db_path: Path to the database file, or ``":memory:"``.
        """
        self.db_path = db_path if db_path == ":memory:" else Path(db_path)
        self.conn = None

    def connect(self) -> None:
        """Open the connection and create the hash table when missing.

        Raises:
            PermissionError: If the database file cannot be opened.
            sqlite3.Error: If the file is not a usable database.
        """
        if isinstance(self.db_path, Path):
            _ = ensure_parent_directory(self.db_path)

        try:
            self.conn = sqlite3.connect(self.db_path, timeout=30.0)
        except sqlite3.OperationalError as e:
            if "unable to open database file" in str(e):
                raise PermissionError(f"Unable to open database at {self.db_path}") from e
            raise

        try:
            _ = self.conn.execute("PRAGMA busy_timeout = 30000")
            _ = self.conn.execute(_SCHEMA)
            self.conn.commit()
        except sqlite3.Error as e:
            logger.debug("Failed to initialize hash table in %s: %s", self.db_path, e)
            self.close()
            raise

    def _connection(self) -> sqlite3.Connection:
        if self.conn is None:
            raise sqlite3.ProgrammingError("DatabaseManager is not connected")
        return self.conn

    def fetch_hashes(self) -> dict[str, str]:
        """Return every stored ``relative_path -> formatted_hash`` pair."""

        rows = self._connection().execute(
            "SELECT relative_path, formatted_hash FROM file_hashes"
        ).fetchall()
        return {str(key): str(value) for key, value in rows}

    def replace_hashes(self, entries: Iterable[tuple[str, str]]) -> int:
        """Replace the table content with ``entries`` in one transaction.

        Returns:
            int: Number of rows written.
        """
        conn = self._connection()
        rows = sorted(entries)
        try:
            _ = conn.execute("DELETE FROM file_hashes")
            _ = conn.executemany(
                "INSERT INTO file_hashes (relative_path, formatted_hash) VALUES (?, ?)",
                rows,
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
        return len(rows)

    def close(self) -> None:
        """Close database connection."""
        if self.conn:
            try:
                self.conn.close()
            except sqlite3.Error as e:
                logger.error("Failed to close database connection: %s", e)
            finally:
                self.conn = None

    def __enter__(self) -> "DatabaseManager":
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any | None,
    ) -> None:
        self.close()
