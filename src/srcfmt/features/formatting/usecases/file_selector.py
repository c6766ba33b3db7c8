"""Summary: Select candidate files beneath source directories using glob patterns.
Why: Give the run controller a deterministic, ordered file list to drive."""

from __future__ import annotations

import fnmatch
from collections.abc import Iterable, Sequence
from pathlib import Path

from srcfmt.config.config import DEFAULT_INCLUDES


def matches_pattern(relative_path: str, pattern: str) -> bool:
    """Check ``relative_path`` (POSIX style) against one glob pattern.

    ``*`` may cross directory separators, and a leading ``**/`` also
    matches files at the top level of the source directory.
    """
    if relative_path == pattern or fnmatch.fnmatchcase(relative_path, pattern):
        return True
    while pattern.startswith("**/"):
        pattern = pattern[3:]
        if fnmatch.fnmatchcase(relative_path, pattern):
            return True
    return False


def _matches_any(relative_path: str, patterns: Sequence[str]) -> bool:
    return any(matches_pattern(relative_path, pattern) for pattern in patterns)


def _is_within(path: Path, directories: Sequence[Path]) -> bool:
    return any(path == directory or path.is_relative_to(directory) for directory in directories)


def select_files(
    directories: Iterable[Path],
    includes: Sequence[str] = (),
    excludes: Sequence[str] = (),
    *,
    ignored_directories: Sequence[Path] = (),
) -> list[Path]:
    """Return files under ``directories`` matching ``includes`` and not ``excludes``.

    Directories are walked in the given order and each one in sorted path
    order. A file reachable from two directories is listed once. Files under
    ``ignored_directories`` (e.g. the build output) are never selected.
    """
    include_patterns = list(includes) or list(DEFAULT_INCLUDES)
    ignored = [directory.resolve() for directory in ignored_directories]
    seen: set[Path] = set()
    selected: list[Path] = []

    for directory in directories:
        root = directory.resolve()
        for candidate in sorted(root.rglob("*")):
            if not candidate.is_file() or _is_within(candidate, ignored):
                continue
            relative = candidate.relative_to(root).as_posix()
            if not _matches_any(relative, include_patterns):
                continue
            if _matches_any(relative, excludes):
                continue
            if candidate in seen:
                continue
            seen.add(candidate)
            selected.append(candidate)

    return selected


__all__ = ["matches_pattern", "select_files"]
