"""Shared pytest fixtures for configuration-focused tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Provide a temporary project root carrying a ``pyproject.toml`` marker."""

    root = tmp_path / "project"
    root.mkdir()
    _ = (root / "pyproject.toml").write_text("[project]\nname='tmp'\n", encoding="utf-8")
    return root
