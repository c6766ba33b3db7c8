"""
Summary: Shared fixtures for formatting feature tests.
Why: Give orchestrator and controller tests scripted engines and a small project tree.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from srcfmt.features.formatting.domain.edits import TextEdit
from srcfmt.features.formatting.engines.base import FormatScope, FormattingEngineError

Transform = Callable[[str, str], str]


class ScriptedEngine:
    """Engine double that rewrites the whole text with ``transform``."""

    name: str = "scripted"

    def __init__(
        self,
        transform: Transform | None = None,
        *,
        not_applicable: bool = False,
        fail_on: str | None = None,
    ) -> None:
        self.transform: Transform | None = transform
        self.not_applicable: bool = not_applicable
        self.fail_on: str | None = fail_on
        self.calls: list[tuple[str, str]] = []

    def format(
        self,
        scope: FormatScope,
        source: str,
        offset: int,
        length: int,
        indent_level: int,
        line_separator: str,
    ) -> list[TextEdit] | None:
        self.calls.append((source, line_separator))
        if self.fail_on is not None and self.fail_on in source:
            raise FormattingEngineError(f"cannot handle {self.fail_on!r}")
        if self.not_applicable:
            return None
        if self.transform is None:
            return []
        return [TextEdit(0, len(source), self.transform(source, line_separator))]


def uppercase(source: str, _separator: str) -> str:
    return source.upper()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project root with a ``src`` directory holding three text files."""

    src = tmp_path / "src"
    src.mkdir()
    _ = (src / "a.txt").write_text("alpha\n", encoding="utf-8")
    _ = (src / "b.txt").write_text("beta\n", encoding="utf-8")
    _ = (src / "c.txt").write_text("GAMMA\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def make_engine() -> type[ScriptedEngine]:
    """Expose the scripted engine class; tests cannot import conftest modules."""

    return ScriptedEngine


@pytest.fixture
def upper() -> Transform:
    return uppercase
