"""Python-aware whitespace engine.

Sources that do not parse under the configured ``compiler.source`` version
are reported as not applicable. Indentation is left untouched, and lines
inside multi-line string literals keep their content byte for byte.
"""

from __future__ import annotations

import ast
import io
import re
import tokenize
from collections.abc import Mapping

from srcfmt.config.config import DEFAULT_COMPILER_VERSION
from srcfmt.platform.logging import logger

from ..domain.edits import TextEdit
from .base import COMPILER_SOURCE, EngineOptionError, FormatScope, FormattingEngineError
from .whitespace import WhitespaceRules, build_edits, check_region, render_lines, split_lines

_VERSION_PATTERN = re.compile(r"^\s*3\.(\d+)\s*$")
_FSTRING_START = getattr(tokenize, "FSTRING_START", None)
_FSTRING_END = getattr(tokenize, "FSTRING_END", None)


def parse_feature_version(raw: str) -> tuple[int, int]:
    """Turn ``"3.8"`` into ``(3, 8)`` for ``ast.parse``."""

    match = _VERSION_PATTERN.match(raw)
    if match is None:
        raise EngineOptionError(COMPILER_SOURCE, raw, "expected a Python 3 version such as 3.11")
    return 3, int(match.group(1))


def multiline_string_lines(source: str) -> frozenset[int]:
    """Return 0-based indexes of lines whose terminator sits inside a string literal.

    Raises:
        FormattingEngineError: If the source cannot be tokenized.
    """
    normalized = re.sub(r"\r\n?", "\n", source)
    protected: set[int] = set()
    fstring_starts: list[int] = []
    try:
        for token in tokenize.generate_tokens(io.StringIO(normalized).readline):
            if token.type == tokenize.STRING:
                first_row, last_row = token.start[0], token.end[0]
            elif _FSTRING_START is not None and token.type == _FSTRING_START:
                fstring_starts.append(token.start[0])
                continue
            elif _FSTRING_END is not None and token.type == _FSTRING_END and fstring_starts:
                first_row, last_row = fstring_starts.pop(), token.end[0]
            else:
                continue
            protected.update(range(first_row - 1, last_row - 1))
    except (tokenize.TokenError, SyntaxError) as exc:
        raise FormattingEngineError(f"Cannot tokenize source: {exc}") from exc
    return frozenset(protected)


class PythonSourceEngine:
    """Whitespace rules for Python modules, gated on a successful parse."""

    name: str = "python"

    def __init__(self, options: Mapping[str, str]) -> None:
        self.rules: WhitespaceRules = WhitespaceRules.from_options(options)
        self.feature_version: tuple[int, int] = parse_feature_version(
            options.get(COMPILER_SOURCE, DEFAULT_COMPILER_VERSION)
        )

    def format(
        self,
        scope: FormatScope,
        source: str,
        offset: int,
        length: int,
        indent_level: int,
        line_separator: str,
    ) -> list[TextEdit] | None:
        if "\x00" in source:
            return None
        check_region(source, offset, length, indent_level)
        try:
            _ = ast.parse(source, feature_version=self.feature_version)
        except (SyntaxError, ValueError) as exc:
            logger.debug("Source does not parse as Python %d.%d: %s", *self.feature_version, exc)
            return None

        lines = split_lines(source)
        rendered = render_lines(
            lines,
            line_separator,
            self.rules,
            protected=multiline_string_lines(source),
            reindent=False,
        )
        return build_edits(lines, rendered, offset, length)


__all__ = ["PythonSourceEngine", "multiline_string_lines", "parse_feature_version"]
