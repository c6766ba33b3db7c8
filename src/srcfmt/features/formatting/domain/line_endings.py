"""
Summary: Line-ending modes and the separator each one targets for a given text.
Why: Keep the KEEP-majority scan and the AUTO fallback in one pure module.
"""

from __future__ import annotations

import os
from enum import StrEnum

LF = "\n"
CRLF = "\r\n"
CR = "\r"


class LineEndingMode(StrEnum):
    """Run-wide line-ending policy."""

    AUTO = "AUTO"
    KEEP = "KEEP"
    LF = "LF"
    CRLF = "CRLF"
    CR = "CR"

    @classmethod
    def from_user_input(cls, value: str) -> "LineEndingMode":
        """Parse ``value`` case-insensitively.

        Raises:
            ValueError: If ``value`` names no known mode.
        """
        normalized = value.strip().upper()
        try:
            return cls(normalized)
        except ValueError as exc:
            allowed = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Unknown value for line ending: {value!r} (expected one of {allowed})"
            ) from exc


_FIXED_SEPARATORS: dict[LineEndingMode, str] = {
    LineEndingMode.LF: LF,
    LineEndingMode.CRLF: CRLF,
    LineEndingMode.CR: CR,
}


def determine_line_ending(text: str) -> str | None:
    """Return the strictly most frequent line terminator in ``text``.

    ``\\r\\n`` counts once as its own class. Ties and terminator-free text
    return ``None``.
    """
    lf_count = 0
    cr_count = 0
    crlf_count = 0

    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char == "\r":
            if index + 1 < length and text[index + 1] == "\n":
                crlf_count += 1
                index += 1
            else:
                cr_count += 1
        elif char == "\n":
            lf_count += 1
        index += 1

    if lf_count > cr_count and lf_count > crlf_count:
        return LF
    if crlf_count > lf_count and crlf_count > cr_count:
        return CRLF
    if cr_count > lf_count and cr_count > crlf_count:
        return CR
    return None


def resolve_line_separator(mode: LineEndingMode, text: str) -> str | None:
    """Return the separator ``mode`` targets for ``text``.

    ``None`` means the platform default applies: always for AUTO, and for
    KEEP when no terminator class holds a strict majority.
    """
    if mode is LineEndingMode.KEEP:
        return determine_line_ending(text)
    return _FIXED_SEPARATORS.get(mode)


def effective_line_separator(
    mode: LineEndingMode,
    text: str,
    *,
    platform_default: str = os.linesep,
) -> str:
    """Resolve the separator for ``text`` falling back to ``platform_default``."""

    resolved = resolve_line_separator(mode, text)
    return platform_default if resolved is None else resolved


__all__ = [
    "CR",
    "CRLF",
    "LF",
    "LineEndingMode",
    "determine_line_ending",
    "effective_line_separator",
    "resolve_line_separator",
]
