"""Test database functionality."""

import sqlite3
from collections.abc import Generator
from pathlib import Path

import pytest

from srcfmt.platform.db.db_manager import DatabaseManager


@pytest.fixture
def db_manager() -> Generator[DatabaseManager, None, None]:
    """Create a database manager with in-memory database.

    Yields:
        DatabaseManager: Database manager instance.
    """
    manager = DatabaseManager(":memory:")  # Use in-memory database for isolation
    manager.connect()
    yield manager
    manager.close()


def test_schema_is_created(db_manager: DatabaseManager) -> None:
    """The hash table exists right after connecting."""
    conn = db_manager.conn
    assert conn is not None
    cursor = conn.cursor()
    _ = cursor.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
    assert ("file_hashes",) in cursor.fetchall()


def test_relative_path_is_unique(db_manager: DatabaseManager) -> None:
    """Each relative path holds at most one hash."""
    conn = db_manager.conn
    assert conn is not None
    _ = conn.execute(
        "INSERT INTO file_hashes (relative_path, formatted_hash) VALUES (?, ?)",
        ("src/a.py", "1"),
    )
    with pytest.raises(sqlite3.IntegrityError):
        _ = conn.execute(
            "INSERT INTO file_hashes (relative_path, formatted_hash) VALUES (?, ?)",
            ("src/a.py", "2"),
        )
    conn.rollback()


def test_context_manager_creates_parent_directory(tmp_path: Path) -> None:
    """File databases get their parent directory created and closed on exit."""
    db_path = tmp_path / "nested" / "cache.db"

    with DatabaseManager(db_path) as manager:
        assert manager.conn is not None

    assert db_path.is_file()
    assert manager.conn is None


def test_replace_hashes_swaps_table_content(db_manager: DatabaseManager) -> None:
    """Replacing writes exactly the given rows and drops the rest."""
    assert db_manager.replace_hashes([("src/b.py", "2"), ("src/a.py", "1")]) == 2
    assert db_manager.replace_hashes([("src/a.py", "3")]) == 1

    assert db_manager.fetch_hashes() == {"src/a.py": "3"}


def test_queries_require_connection() -> None:
    """Using the manager before connecting fails loudly."""
    with pytest.raises(sqlite3.ProgrammingError):
        _ = DatabaseManager(":memory:").fetch_hashes()


def test_non_database_file_is_rejected(tmp_path: Path) -> None:
    """A file that is not SQLite raises and leaves no open connection."""
    db_path = tmp_path / "cache.db"
    _ = db_path.write_bytes(b"plain text, not a database" * 100)
    manager = DatabaseManager(db_path)

    with pytest.raises(sqlite3.DatabaseError):
        manager.connect()

    assert manager.conn is None
