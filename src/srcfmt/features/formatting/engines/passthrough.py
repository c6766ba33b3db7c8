"""No-op engine: every input is applicable and nothing changes."""

from __future__ import annotations

from collections.abc import Mapping

from ..domain.edits import TextEdit
from .base import FormatScope
from .whitespace import check_region


class PassthroughEngine:
    name: str = "passthrough"

    def __init__(self, options: Mapping[str, str]) -> None:
        self.options: dict[str, str] = dict(options)

    def format(
        self,
        scope: FormatScope,
        source: str,
        offset: int,
        length: int,
        indent_level: int,
        line_separator: str,
    ) -> list[TextEdit] | None:
        check_region(source, offset, length, indent_level)
        return []


__all__ = ["PassthroughEngine"]
