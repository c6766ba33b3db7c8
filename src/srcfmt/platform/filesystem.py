"""Filesystem helpers reused across multiple layers."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def ensure_directory(directory: Path) -> Path:
    """Ensure ``directory`` exists as a folder and return it."""

    if directory.exists():
        if not directory.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {directory}")
        return directory

    directory.mkdir(parents=True, exist_ok=True)
    return directory


def ensure_parent_directory(path: Path) -> Path:
    """Ensure the parent directory for ``path`` exists and return it."""

    return ensure_directory(path.parent)


def read_source_text(path: Path, encoding: str) -> str:
    """Read ``path`` without translating line terminators."""

    with open(path, "r", encoding=encoding, newline="") as handle:
        return handle.read()


def write_source_text(path: Path, content: str, encoding: str) -> None:
    """Overwrite ``path`` with ``content`` without translating line terminators."""

    with open(path, "w", encoding=encoding, newline="") as handle:
        _ = handle.write(content)


def atomic_write_bytes(path: Path, payload: bytes) -> None:
    """Write ``payload`` through a sibling temporary file and ``os.replace``."""

    _ = ensure_parent_directory(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            _ = handle.write(payload)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


__all__ = [
    "atomic_write_bytes",
    "ensure_directory",
    "ensure_parent_directory",
    "read_source_text",
    "write_source_text",
]
