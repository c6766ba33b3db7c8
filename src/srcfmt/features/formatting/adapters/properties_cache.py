"""
Summary: Hash cache store backed by a properties file in the build directory.
Why: Keep cache file layout and failure policy out of the use cases layer.
"""

from __future__ import annotations

from pathlib import Path

from srcfmt.features.formatting.usecases.hash_cache import HashCache
from srcfmt.features.formatting.usecases.ports import HashCacheStorePort
from srcfmt.features.formatting.usecases.processing_types import FormatEvent
from srcfmt.platform.filesystem import atomic_write_bytes
from srcfmt.platform.logging import logger
from srcfmt.platform.properties import PropertiesFormatError, dump_bytes, load_bytes

CACHE_FILENAME = "srcfmt-cache.properties"
CACHE_COMMENT = "srcfmt formatted file hashes"


class PropertiesHashCacheStore(HashCacheStorePort):
    """Load and persist the hash cache as ``key=value`` lines."""

    def __init__(self, build_dir: Path, filename: str = CACHE_FILENAME) -> None:
        self.build_dir: Path = build_dir
        self._path: Path = build_dir / filename

    @property
    def location(self) -> Path:
        return self._path

    def load(self) -> HashCache:
        if not self.build_dir.exists():
            try:
                self.build_dir.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                logger.warning("Cannot create build directory %s: %s", self.build_dir, exc)
            return HashCache()
        if not self.build_dir.is_dir():
            logger.warning(
                "Build directory %s exists but is not a directory; starting with an empty cache",
                self.build_dir,
            )
            return HashCache()
        if not self._path.exists():
            logger.debug("No hash cache at %s; starting empty", self._path)
            return HashCache()

        try:
            entries = load_bytes(self._path.read_bytes())
        except (OSError, PropertiesFormatError) as exc:
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
            atomic_write_bytes(self._path, dump_bytes(entries, comment=CACHE_COMMENT))
        except OSError as exc:
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


__all__ = ["CACHE_FILENAME", "PropertiesHashCacheStore"]
