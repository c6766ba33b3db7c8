"""
Summary: Hash cache store backed by an SQLite table in the build directory.
Why: Offer an embedded-table alternative to the properties file with the same load/persist policy.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Callable
from pathlib import Path

from srcfmt.features.formatting.usecases.hash_cache import HashCache
from srcfmt.features.formatting.usecases.ports import HashCacheStorePort
from srcfmt.features.formatting.usecases.processing_types import FormatEvent
from srcfmt.platform.db.db_manager import DatabaseManager
from srcfmt.platform.logging import logger

DATABASE_FILENAME = "srcfmt-cache.db"
_DAMAGED_ERRORS: tuple[str, ...] = ("SQLITE_NOTADB", "SQLITE_CORRUPT")


class SqliteHashCacheStore(HashCacheStorePort):
    """Read and replace the ``file_hashes`` table in one transaction per run."""

    def __init__(
        self,
        build_dir: Path,
        filename: str = DATABASE_FILENAME,
        *,
        db_factory: Callable[[Path], DatabaseManager] = DatabaseManager,
    ) -> None:
        self.build_dir: Path = build_dir
        self._path: Path = build_dir / filename
        self._db_factory: Callable[[Path], DatabaseManager] = db_factory

    @property
    def location(self) -> Path:
        return self._path

    def load(self) -> HashCache:
        if self.build_dir.exists() and not self.build_dir.is_dir():
            logger.warning(
                "Build directory %s exists but is not a directory; starting with an empty cache",
                self.build_dir,
            )
            return HashCache()

        try:
            with self._db_factory(self._path) as db:
                entries = db.fetch_hashes()
        except (OSError, sqlite3.Error) as exc:
            logger.warning(
                "Cannot load hash cache %s, starting with an empty cache: %s",
                self._path,
                exc,
                extra={
                    "format_event": FormatEvent.CACHE_LOAD_ERROR.value,
                    "error_message": str(exc),
                },
            )
            return HashCache()

        logger.debug("Loaded %d cache entries from %s", len(entries), self._path)
        return HashCache(entries)

    def persist(self, cache: HashCache) -> bool:
        entries = cache.snapshot()
        try:
            try:
                self._replace(entries)
            except sqlite3.DatabaseError as exc:
                if not _is_damaged(exc) or not self._path.is_file():
                    raise
                logger.warning(
                    "Hash cache %s is damaged, recreating it: %s",
                    self._path,
                    exc,
                    extra={
                        "format_event": FormatEvent.CACHE_PERSIST_ERROR.value,
                        "error_message": str(exc),
                    },
                )
                self._path.unlink()
                self._replace(entries)
        except (OSError, sqlite3.Error) as exc:
            logger.warning(
                "Cannot store hash cache %s: %s",
                self._path,
                exc,
                extra={
                    "format_event": FormatEvent.CACHE_PERSIST_ERROR.value,
                    "error_message": str(exc),
                },
            )
            return False
        logger.debug("Stored %d cache entries in %s", len(entries), self._path)
        return True

    def _replace(self, entries: dict[str, str]) -> None:
        with self._db_factory(self._path) as db:
            _ = db.replace_hashes(entries.items())


def _is_damaged(exc: sqlite3.DatabaseError) -> bool:
    name = getattr(exc, "sqlite_errorname", None) or ""
    return name.startswith(_DAMAGED_ERRORS)


__all__ = ["DATABASE_FILENAME", "SqliteHashCacheStore"]
