"""Shared path utilities for configuration and build locations.

This module centralizes how the formatter discovers the project it runs
against and where it keeps its persisted state.

Policy:
- Project root: nearest parent holding ``srcfmt.toml``, ``pyproject.toml``
  or ``.git``; falls back to the working directory.
- Config: ``<project_root>/srcfmt.toml``
- Build output (hash cache): ``<project_root>/build`` unless overridden by
  ``SRCFMT_BUILD_DIR``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Callable, Final


CONFIG_FILE_NAME: Final[str] = "srcfmt.toml"
BUILD_DIR_NAME: Final[str] = "build"

_ENV_BUILD_DIR: Final[str] = "SRCFMT_BUILD_DIR"
_ROOT_MARKERS: Final[tuple[str, ...]] = (CONFIG_FILE_NAME, "pyproject.toml", ".git")


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
) -> Path:
    """Resolve a configuration path honoring explicit and environment overrides."""

    if explicit_path is not None:
        return Path(explicit_path).expanduser().resolve()

    mapping = env if env is not None else os.environ
    if env_var:
        candidate = mapping.get(env_var) or ""
        candidate = candidate.strip()
        if candidate:
            return Path(candidate).expanduser().resolve()

    default_path = default_factory()
    return default_path.expanduser().resolve()


def detect_project_root(start: Path | None = None) -> Path:
    """Detect the project root by walking up from ``start``.

    Args:
        start: Starting directory. Defaults to the current working directory.

    Returns:
        Path: First directory carrying a root marker, or ``start`` itself
        when no marker is found.
    """
    here = (start or Path.cwd()).expanduser().resolve()
    for p in [here, *here.parents]:
        if any((p / marker).exists() for marker in _ROOT_MARKERS):
            return p
    return here


def default_config_path(project_root: Path) -> Path:
    """Get the default path to the TOML config file for ``project_root``."""

    return (project_root / CONFIG_FILE_NAME).resolve()


def default_build_dir(
    project_root: Path,
    *,
    env: Mapping[str, str] | None = None,
) -> Path:
    """Get the build output directory holding the hash cache."""

    return resolve_overridable_path(
        explicit_path=None,
        env=env,
        env_var=_ENV_BUILD_DIR,
        default_factory=lambda: project_root / BUILD_DIR_NAME,
    )


__all__ = [
    "BUILD_DIR_NAME",
    "CONFIG_FILE_NAME",
    "default_build_dir",
    "default_config_path",
    "detect_project_root",
    "resolve_overridable_path",
]
