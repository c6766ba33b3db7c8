"""Summary: Encode and decode Java-style ``.properties`` key/value files.
Why: The hash cache is persisted as a flat properties file readable by other tooling.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from datetime import datetime, timezone

PROPERTIES_ENCODING = "iso-8859-1"

_SEPARATORS = frozenset("=:")
_WHITESPACE = frozenset(" \t\f")
_UNESCAPES: dict[str, str] = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
    "\f": "\\f",
    "=": "\\=",
    ":": "\\:",
    "#": "\\#",
    "!": "\\!",
}
_LINE_SPLIT = re.compile(r"\r\n|\r|\n")


class PropertiesFormatError(ValueError):
    """Raised when a properties document holds a malformed escape sequence."""


def loads(text: str) -> dict[str, str]:
    """Parse properties ``text`` into a dictionary; later keys win."""

    entries: dict[str, str] = {}
    for line_number, logical in _logical_lines(text):
        key, value = _split_entry(logical)
        try:
            entries[_unescape(key)] = _unescape(value)
        except PropertiesFormatError as exc:
            raise PropertiesFormatError(f"line {line_number}: {exc}") from exc
    return entries


def load_bytes(payload: bytes) -> dict[str, str]:
    """Decode ``payload`` with the properties charset and parse it."""

    return loads(payload.decode(PROPERTIES_ENCODING))


def dumps(entries: Mapping[str, str], *, comment: str | None = None) -> str:
    """Serialize ``entries`` as properties text, sorted by key.

    The first line is a timestamp comment, preceded by ``comment`` when given.
    """
    lines: list[str] = []
    if comment:
        lines.append("#" + _escape(comment, is_key=False))
    lines.append("#" + datetime.now(timezone.utc).strftime("%a %b %d %H:%M:%S %Z %Y"))
    for key in sorted(entries):
        lines.append(f"{_escape(key, is_key=True)}={_escape(entries[key], is_key=False)}")
    return "\n".join(lines) + "\n"


def dump_bytes(entries: Mapping[str, str], *, comment: str | None = None) -> bytes:
    """Serialize ``entries`` to bytes in the properties charset."""

    return dumps(entries, comment=comment).encode(PROPERTIES_ENCODING)


def _logical_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, logical_line)`` with comments removed and continuations joined."""

    physical = _LINE_SPLIT.split(text)
    index = 0
    while index < len(physical):
        start = index + 1
        line = physical[index].lstrip(" \t\f")
        index += 1
        if not line or line[0] in "#!":
            continue
        while _ends_with_continuation(line) and index < len(physical):
            line = line[:-1] + physical[index].lstrip(" \t\f")
            index += 1
        if _ends_with_continuation(line):
            line = line[:-1]
        yield start, line


def _ends_with_continuation(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _split_entry(line: str) -> tuple[str, str]:
    """Split a logical line at the first unescaped separator."""

    index = 0
    length = len(line)
    while index < length:
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        index += 1
    key = line[:index]

    while index < length and line[index] in _WHITESPACE:
        index += 1
    if index < length and line[index] in _SEPARATORS:
        index += 1
    while index < length and line[index] in _WHITESPACE:
        index += 1
    return key, line[index:]


def _unescape(raw: str) -> str:
    out: list[str] = []
    index = 0
    length = len(raw)
    while index < length:
        char = raw[index]
        index += 1
        if char != "\\" or index >= length:
            out.append(char)
            continue
        marker = raw[index]
        index += 1
        if marker == "u":
            digits = raw[index:index + 4]
            if len(digits) != 4 or any(d not in "0123456789abcdefABCDEF" for d in digits):
                raise PropertiesFormatError(f"malformed \\uxxxx encoding: \\u{digits}")
            out.append(chr(int(digits, 16)))
            index += 4
        else:
            out.append(_UNESCAPES.get(marker, marker))
    joined = "".join(out)
    if not any("\ud800" <= char <= "\udfff" for char in joined):
        return joined
    # Rejoin UTF-16 surrogate pairs written as two \u escapes.
    try:
        return joined.encode("utf-16-be", "surrogatepass").decode("utf-16-be")
    except UnicodeDecodeError as exc:
        raise PropertiesFormatError("unpaired surrogate escape") from exc


def _escape(value: str, *, is_key: bool) -> str:
    out: list[str] = []
    for position, char in enumerate(value):
        if char == " ":
            out.append("\\ " if is_key or position == 0 else " ")
        elif char in _ESCAPES:
            out.append(_ESCAPES[char])
        elif " " <= char <= "~":
            out.append(char)
        else:
            for unit in _utf16_units(char):
                out.append(f"\\u{unit:04X}")
    return "".join(out)


def _utf16_units(char: str) -> list[int]:
    encoded = char.encode("utf-16-be", "surrogatepass")
    return [int.from_bytes(encoded[i:i + 2], "big") for i in range(0, len(encoded), 2)]


__all__ = [
    "PROPERTIES_ENCODING",
    "PropertiesFormatError",
    "dump_bytes",
    "dumps",
    "load_bytes",
    "loads",
]
