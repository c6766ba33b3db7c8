"""Helpers for writing ``srcfmt.toml`` without clobbering user edits."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from srcfmt.platform.filesystem import atomic_write_bytes


def ensure_file_with_template(
    path: Path,
    *,
    template_provider: Callable[[], str],
    overwrite: bool = False,
) -> bool:
    """Write the rendered template to ``path`` unless a file is already there.

    The template is only rendered when it will be written. The file is
    replaced atomically so an interrupted ``init --force`` keeps the old one.

    Returns:
        bool: ``True`` when the file was written, ``False`` if it already existed.
    """

    if path.exists() and not overwrite:
        return False

    atomic_write_bytes(path, template_provider().encode("utf-8"))
    return True


__all__ = ["ensure_file_with_template"]
