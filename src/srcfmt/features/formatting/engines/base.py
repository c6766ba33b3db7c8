"""
Summary: Formatting engine contract, scope flags, and shared option keys.
Why: The orchestrator treats engines as opaque; this module is the whole boundary.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import IntFlag
from typing import Protocol, runtime_checkable

from srcfmt.config.errors import ConfigurationError

from ..domain.edits import TextEdit

COMPILER_SOURCE = "compiler.source"
COMPILER_COMPLIANCE = "compiler.compliance"
COMPILER_TARGET_PLATFORM = "compiler.codegen.target_platform"
COMPILER_OPTION_KEYS: tuple[str, ...] = (
    COMPILER_SOURCE,
    COMPILER_COMPLIANCE,
    COMPILER_TARGET_PLATFORM,
)

TAB_CHAR = "tabulation.char"
TAB_SIZE = "tabulation.size"
TRIM_TRAILING_WHITESPACE = "trim_trailing_whitespace"
INSERT_FINAL_NEWLINE = "insert_final_newline"
MAX_BLANK_LINES = "blank_lines.max"


class FormatScope(IntFlag):
    """What kind of source unit is being formatted."""

    EXPRESSION = 0x01
    STATEMENTS = 0x02
    COMPILATION_UNIT = 0x08
    INCLUDE_COMMENTS = 0x1000


DOCUMENT_SCOPE = FormatScope.COMPILATION_UNIT | FormatScope.INCLUDE_COMMENTS


class FormattingEngineError(Exception):
    """Structural failure inside an engine while formatting one input."""


class EngineOptionError(ConfigurationError):
    """An engine option holds a value the engine cannot use."""

    def __init__(self, key: str, value: str, expected: str) -> None:
        super().__init__(f"Invalid value {value!r} for formatter option {key} ({expected})")
        self.key: str = key
        self.value: str = value


@runtime_checkable
class FormattingEngine(Protocol):
    """Pluggable formatter: text in, edits out, or ``None`` when not applicable."""

    name: str

    def format(
        self,
        scope: FormatScope,
        source: str,
        offset: int,
        length: int,
        indent_level: int,
        line_separator: str,
    ) -> list[TextEdit] | None:
        """Return edits that format ``source[offset:offset + length]``.

        ``None`` signals the input cannot be handled, e.g. it does not parse
        under the configured language version.
        """
        ...


def option_bool(options: Mapping[str, str], key: str, default: bool) -> bool:
    raw = options.get(key)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in {"true", "yes", "on", "1"}:
        return True
    if normalized in {"false", "no", "off", "0"}:
        return False
    raise EngineOptionError(key, raw, "expected true or false")


def option_int(options: Mapping[str, str], key: str, default: int) -> int:
    raw = options.get(key)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise EngineOptionError(key, raw, "expected an integer") from exc


def option_choice(
    options: Mapping[str, str],
    key: str,
    default: str,
    choices: tuple[str, ...],
) -> str:
    raw = options.get(key)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized not in choices:
        raise EngineOptionError(key, raw, "expected one of " + ", ".join(choices))
    return normalized


__all__ = [
    "COMPILER_COMPLIANCE",
    "COMPILER_OPTION_KEYS",
    "COMPILER_SOURCE",
    "COMPILER_TARGET_PLATFORM",
    "DOCUMENT_SCOPE",
    "EngineOptionError",
    "FormatScope",
    "FormattingEngine",
    "FormattingEngineError",
    "INSERT_FINAL_NEWLINE",
    "MAX_BLANK_LINES",
    "TAB_CHAR",
    "TAB_SIZE",
    "TRIM_TRAILING_WHITESPACE",
    "option_bool",
    "option_choice",
    "option_int",
]
