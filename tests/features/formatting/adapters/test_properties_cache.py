"""
Summary: Tests for the properties-file hash cache store.
Why: Missing, corrupt, and unwritable cache files must never fail a run.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from srcfmt.features.formatting.adapters.properties_cache import (
    CACHE_FILENAME,
    PropertiesHashCacheStore,
)
from srcfmt.features.formatting.usecases.hash_cache import HashCache
from srcfmt.features.formatting.usecases.ports import HashCacheStorePort


def test_round_trip_through_build_directory(tmp_path: Path) -> None:
    store = PropertiesHashCacheStore(tmp_path / "build")
    cache = store.load()
    cache.put("src/a b.py", "abc123")
    cache.put("src/ünï.py", "def456")

    assert store.persist(cache) is True
    reloaded = PropertiesHashCacheStore(tmp_path / "build").load()

    assert reloaded.snapshot() == {"src/a b.py": "abc123", "src/ünï.py": "def456"}
    assert isinstance(store, HashCacheStorePort)
    assert store.location == tmp_path / "build" / CACHE_FILENAME


def test_missing_build_directory_is_created(tmp_path: Path) -> None:
    build = tmp_path / "target" / "build"

    cache = PropertiesHashCacheStore(build).load()

    assert len(cache) == 0
    assert build.is_dir()


def test_build_path_that_is_a_file_yields_empty_cache(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    build = tmp_path / "build"
    _ = build.write_text("not a directory", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="srcfmt"):
        cache = PropertiesHashCacheStore(build).load()

    assert len(cache) == 0
    assert any("is not a directory" in record.getMessage() for record in caplog.records)


def test_corrupt_cache_loads_empty_with_warning(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    build = tmp_path / "build"
    build.mkdir()
    _ = (build / CACHE_FILENAME).write_bytes(b"src/a.py=\\uZZZZ\n")

    with caplog.at_level(logging.WARNING, logger="srcfmt"):
        cache = PropertiesHashCacheStore(build).load()

    assert len(cache) == 0
    record = next(r for r in caplog.records if "Cannot load hash cache" in r.getMessage())
    assert getattr(record, "format_event") == "format.cache.load_error"


def test_persist_failure_returns_false(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    blocker = tmp_path / "build"
    _ = blocker.write_text("file in the way", encoding="utf-8")
    store = PropertiesHashCacheStore(blocker)

    with caplog.at_level(logging.WARNING, logger="srcfmt"):
        persisted = store.persist(HashCache({"a": "1"}))

    assert persisted is False
    assert any("Cannot store hash cache" in record.getMessage() for record in caplog.records)


def test_persisted_file_is_sorted_key_value_lines(tmp_path: Path) -> None:
    store = PropertiesHashCacheStore(tmp_path)
    _ = store.persist(HashCache({"b.py": "2", "a.py": "1"}))

    lines = (tmp_path / CACHE_FILENAME).read_text(encoding="iso-8859-1").splitlines()

    assert [line for line in lines if not line.startswith("#")] == ["a.py=1", "b.py=2"]
