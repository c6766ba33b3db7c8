"""Summary: Ports defining formatting use case dependencies.
Why: Decouple use cases from concrete cache backends so tests and swaps stay simple."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from .hash_cache import HashCache


@runtime_checkable
class HashCacheStorePort(Protocol):
    """Port for loading and persisting the hash cache of one project."""

    @property
    def location(self) -> Path:
        """Where the cache lives, for diagnostics."""
        ...

    def load(self) -> HashCache:
        """Return the persisted cache; missing or corrupt storage yields an empty cache."""
        ...

    def persist(self, cache: HashCache) -> bool:
        """Write every entry; return ``False`` (after logging) when storage failed."""
        ...


__all__ = ["HashCacheStorePort"]
