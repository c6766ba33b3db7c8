"""
Summary: In-memory hash cache, cache keys, and content fingerprints.
Why: The orchestrator decides skip/format from these; storage backends only load and persist them.
"""

from __future__ import annotations

import hashlib
import threading
from collections.abc import Iterator, Mapping
from pathlib import Path


def content_hash(text: str, encoding: str) -> str:
    """Return the SHA-256 hex digest of ``text`` encoded with ``encoding``."""

    return hashlib.sha256(text.encode(encoding)).hexdigest()


def cache_key_for(path: Path, base_dir: Path) -> str:
    """Return the cache key of ``path``: its canonical path relative to ``base_dir``.

    The key does not depend on the working directory. Files outside
    ``base_dir`` keep their full canonical path.
    """
    canonical = path.resolve()
    base = base_dir.resolve()
    try:
        return canonical.relative_to(base).as_posix()
    except ValueError:
        return canonical.as_posix()


class HashCache:
    """Mapping of cache key to last-known formatted hash, safe to share between workers."""

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries: dict[str, str] = dict(entries or {})
        self._lock: threading.Lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, formatted_hash: str) -> None:
        with self._lock:
            self._entries[key] = formatted_hash

    def snapshot(self) -> dict[str, str]:
        """Return a copy of the entries for persistence."""

        with self._lock:
            return dict(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())


__all__ = ["HashCache", "cache_key_for", "content_hash"]
