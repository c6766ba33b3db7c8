"""
Summary: Package marker for hash cache storage adapters.
Why: Keep adapter exports together for easy discovery.
"""

from .properties_cache import CACHE_FILENAME, PropertiesHashCacheStore
from .sqlite_cache import DATABASE_FILENAME, SqliteHashCacheStore

__all__ = [
    "CACHE_FILENAME",
    "DATABASE_FILENAME",
    "PropertiesHashCacheStore",
    "SqliteHashCacheStore",
]
