"""Tests for filesystem helpers."""

from __future__ import annotations

from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from srcfmt.platform.filesystem import (
    atomic_write_bytes,
    ensure_directory,
    read_source_text,
    write_source_text,
)


def test_source_text_keeps_line_terminators(tmp_path: Path) -> None:
    target = tmp_path / "mixed.txt"

    write_source_text(target, "a\r\nb\rc\n", "utf-8")

    assert target.read_bytes() == b"a\r\nb\rc\n"
    assert read_source_text(target, "utf-8") == "a\r\nb\rc\n"


def test_ensure_directory_rejects_files(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.touch()

    assert ensure_directory(tmp_path / "x" / "y").is_dir()
    with pytest.raises(NotADirectoryError):
        _ = ensure_directory(blocker)


def test_atomic_write_replaces_content(tmp_path: Path) -> None:
    target = tmp_path / "out" / "cache.properties"

    atomic_write_bytes(target, b"one")
    atomic_write_bytes(target, b"two")

    assert target.read_bytes() == b"two"
    assert sorted(path.name for path in target.parent.iterdir()) == ["cache.properties"]


def test_atomic_write_failure_leaves_no_temporary_file(
    tmp_path: Path, mocker: MockerFixture
) -> None:
    target = tmp_path / "cache.properties"
    _ = target.write_bytes(b"old")
    _ = mocker.patch("srcfmt.platform.filesystem.os.replace", side_effect=OSError("busy"))

    with pytest.raises(OSError, match="busy"):
        atomic_write_bytes(target, b"new")

    assert target.read_bytes() == b"old"
    assert [path.name for path in tmp_path.iterdir()] == ["cache.properties"]
