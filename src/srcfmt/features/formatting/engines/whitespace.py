"""Language-agnostic whitespace engine.

Rules, each driven by an option from the ``[formatter]`` table:

- trailing spaces and tabs are removed (``trim_trailing_whitespace``)
- leading indentation is rewritten with spaces or tabs (``tabulation.char``,
  ``tabulation.size``); ``keep`` leaves it alone
- runs of blank lines longer than ``blank_lines.max`` are shortened
- the file ends with exactly one separator (``insert_final_newline``)
- every line terminator becomes the requested separator
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ..domain.edits import TextEdit
from .base import (
    FormatScope,
    FormattingEngineError,
    EngineOptionError,
    INSERT_FINAL_NEWLINE,
    MAX_BLANK_LINES,
    TAB_CHAR,
    TAB_SIZE,
    TRIM_TRAILING_WHITESPACE,
    option_bool,
    option_choice,
    option_int,
)

_LINE_PATTERN = re.compile(r"([^\r\n]*)(\r\n|\r|\n|)")
_TRAILING_WHITESPACE = " \t\f\v"
_TAB_CHOICES: tuple[str, ...] = ("keep", "space", "tab")

DEFAULT_TAB_CHAR = "keep"
DEFAULT_TAB_SIZE = 4
DEFAULT_TRIM_TRAILING = True
DEFAULT_FINAL_NEWLINE = True
DEFAULT_MAX_BLANK_LINES = 2


@dataclass(frozen=True, slots=True)
class SourceLine:
    """One physical line of the input with its original terminator."""

    start: int
    content: str
    terminator: str

    @property
    def raw(self) -> str:
        return self.content + self.terminator


def split_lines(source: str) -> list[SourceLine]:
    """Split ``source`` into lines, treating ``\\r\\n``, ``\\r`` and ``\\n`` as terminators."""

    lines: list[SourceLine] = []
    position = 0
    while position < len(source):
        match = _LINE_PATTERN.match(source, position)
        assert match is not None
        lines.append(SourceLine(position, match.group(1), match.group(2)))
        position = match.end()
    return lines


@dataclass(frozen=True, slots=True)
class WhitespaceRules:
    tab_char: str = DEFAULT_TAB_CHAR
    tab_size: int = DEFAULT_TAB_SIZE
    trim_trailing: bool = DEFAULT_TRIM_TRAILING
    final_newline: bool = DEFAULT_FINAL_NEWLINE
    max_blank_lines: int = DEFAULT_MAX_BLANK_LINES

    @classmethod
    def from_options(cls, options: Mapping[str, str]) -> "WhitespaceRules":
        tab_size = option_int(options, TAB_SIZE, DEFAULT_TAB_SIZE)
        if tab_size < 1:
            raise EngineOptionError(TAB_SIZE, str(tab_size), "expected a positive integer")
        return cls(
            tab_char=option_choice(options, TAB_CHAR, DEFAULT_TAB_CHAR, _TAB_CHOICES),
            tab_size=tab_size,
            trim_trailing=option_bool(options, TRIM_TRAILING_WHITESPACE, DEFAULT_TRIM_TRAILING),
            final_newline=option_bool(options, INSERT_FINAL_NEWLINE, DEFAULT_FINAL_NEWLINE),
            max_blank_lines=option_int(options, MAX_BLANK_LINES, DEFAULT_MAX_BLANK_LINES),
        )

    def reindent(self, content: str) -> str:
        stripped = content.lstrip(" \t")
        leading = content[: len(content) - len(stripped)]
        if not leading or self.tab_char == "keep":
            return content
        column = 0
        for char in leading:
            column = (column // self.tab_size + 1) * self.tab_size if char == "\t" else column + 1
        if self.tab_char == "space":
            return " " * column + stripped
        return "\t" * (column // self.tab_size) + " " * (column % self.tab_size) + stripped


def render_lines(
    lines: Sequence[SourceLine],
    separator: str,
    rules: WhitespaceRules,
    *,
    protected: frozenset[int] = frozenset(),
    reindent: bool = True,
) -> list[str]:
    """Return the formatted replacement for every line, ``""`` for removed lines.

    Lines whose index is in ``protected`` keep their content verbatim and
    are never removed; only their terminator is rewritten.
    """
    last_content = max(
        (index for index, line in enumerate(lines) if line.content.strip() or index in protected),
        default=None,
    )
    rendered: list[str] = []
    blank_run = 0
    for index, line in enumerate(lines):
        if index in protected:
            blank_run = 0
            rendered.append(line.content + (separator if line.terminator else ""))
            continue
        if rules.final_newline and (last_content is None or index > last_content):
            rendered.append("")
            continue

        content = line.content
        if rules.trim_trailing:
            content = content.rstrip(_TRAILING_WHITESPACE)
        if reindent:
            content = rules.reindent(content)

        if content.strip():
            blank_run = 0
        else:
            blank_run += 1
            if 0 <= rules.max_blank_lines < blank_run:
                rendered.append("")
                continue

        if line.terminator or (rules.final_newline and index == last_content):
            rendered.append(content + separator)
        else:
            rendered.append(content)
    return rendered


def build_edits(
    lines: Sequence[SourceLine],
    rendered: Sequence[str],
    offset: int,
    length: int,
) -> list[TextEdit]:
    """Emit one edit per changed line that lies inside ``[offset, offset + length)``."""

    region_end = offset + length
    edits: list[TextEdit] = []
    for line, replacement in zip(lines, rendered, strict=True):
        raw = line.raw
        if replacement == raw:
            continue
        if line.start < offset or line.start + len(raw) > region_end:
            continue
        edits.append(TextEdit(line.start, len(raw), replacement))
    return edits


def check_region(source: str, offset: int, length: int, indent_level: int) -> None:
    if offset < 0 or length < 0 or offset + length > len(source):
        raise FormattingEngineError(
            f"Region [{offset}, {offset + length}) is outside source of length {len(source)}"
        )
    if indent_level < 0:
        raise FormattingEngineError(f"Negative indentation level: {indent_level}")


class WhitespaceEngine:
    """Default engine; applicable to any text that is not binary."""

    name: str = "whitespace"

    def __init__(self, options: Mapping[str, str]) -> None:
        self.rules: WhitespaceRules = WhitespaceRules.from_options(options)

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
        lines = split_lines(source)
        rendered = render_lines(lines, line_separator, self.rules)
        return build_edits(lines, rendered, offset, length)


__all__ = [
    "SourceLine",
    "WhitespaceEngine",
    "WhitespaceRules",
    "build_edits",
    "check_region",
    "render_lines",
    "split_lines",
]
