"""
Summary: Tests for the properties file codec.
Why: The hash cache file must stay readable by standard properties parsers.
"""

from __future__ import annotations

import pytest

from srcfmt.platform.properties import (
    PropertiesFormatError,
    dump_bytes,
    dumps,
    load_bytes,
    loads,
)


def test_loads_handles_separators_comments_and_continuations() -> None:
    text = (
        "# comment\n"
        "! another comment\n"
        "equals=1\n"
        "colon:2\n"
        "space 3\n"
        "  padded   =   4\n"
        "continued = a\\\n"
        "    b\\\n"
        "    c\n"
        "empty\n"
    )

    assert loads(text) == {
        "equals": "1",
        "colon": "2",
        "space": "3",
        "padded": "4",
        "continued": "abc",
        "empty": "",
    }


def test_loads_unescapes_keys_and_values() -> None:
    text = "a\\ key\\=x = tab\\there\\u00e9\nemoji=\\uD83D\\uDE00\n"

    assert loads(text) == {"a key=x": "tab\thereé", "emoji": "\U0001f600"}


def test_later_keys_win() -> None:
    assert loads("k=1\r\nk=2\r") == {"k": "2"}


@pytest.mark.parametrize("text", ["k=\\u12", "k=\\uXYZW", "k=\\uD83D"])
def test_malformed_escapes_raise(text: str) -> None:
    with pytest.raises(PropertiesFormatError):
        _ = loads(text)


def test_dumps_escapes_and_sorts() -> None:
    text = dumps({"z": "last", " lead:key": "é\n#", "a": " x"}, comment="cache")
    lines = text.splitlines()

    assert lines[0] == "#cache"
    assert lines[1].startswith("#")
    assert lines[2:] == ["\\ lead\\:key=\\u00E9\\n\\#", "a=\\ x", "z=last"]


def test_bytes_round_trip_outside_latin1() -> None:
    entries = {"src/日本.py": "0f" * 32, "src/plain.py": "ab"}

    payload = dump_bytes(entries)

    assert payload.decode("ascii")
    assert load_bytes(payload) == entries
