"""
Summary: Tests for reading formatter options documents.
Why: Any problem with the document must stop the run before files are touched.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from srcfmt.config.errors import ConfigurationError, OptionsDocumentError
from srcfmt.config.options_reader import flatten_options, read_options_document


def test_formatter_table_is_flattened(tmp_path: Path) -> None:
    document = tmp_path / "formatter.toml"
    _ = document.write_text(
        "[project]\nname = 'ignored'\n\n"
        "[formatter]\n"
        'compiler.source = "3.10"\n'
        "insert_final_newline = false\n"
        "blank_lines.max = 1\n"
        "tabulation = { char = 'tab', size = 8 }\n",
        encoding="utf-8",
    )

    assert read_options_document(document) == {
        "compiler.source": "3.10",
        "insert_final_newline": "false",
        "blank_lines.max": "1",
        "tabulation.char": "tab",
        "tabulation.size": "8",
    }


def test_whole_document_is_used_without_formatter_table(tmp_path: Path) -> None:
    document = tmp_path / "flat.toml"
    _ = document.write_text('tabulation.char = "space"\n', encoding="utf-8")

    assert read_options_document(document) == {"tabulation.char": "space"}


def test_missing_document_cannot_be_found(tmp_path: Path) -> None:
    with pytest.raises(OptionsDocumentError, match="cannot be found"):
        _ = read_options_document(tmp_path / "missing.toml")


def test_directory_is_not_a_document(tmp_path: Path) -> None:
    with pytest.raises(OptionsDocumentError, match="does not exist"):
        _ = read_options_document(tmp_path)


def test_invalid_toml_cannot_be_parsed(tmp_path: Path) -> None:
    document = tmp_path / "broken.toml"
    _ = document.write_text("[formatter\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="cannot be parsed"):
        _ = read_options_document(document)


def test_non_table_formatter_entry_is_rejected(tmp_path: Path) -> None:
    document = tmp_path / "odd.toml"
    _ = document.write_text('formatter = "yes"\n', encoding="utf-8")

    with pytest.raises(OptionsDocumentError):
        _ = read_options_document(document)


def test_flatten_options_stringifies_lists() -> None:
    assert flatten_options({"a": [1, True, "x"], "b": {"c": 2.5}}) == {
        "a": "1,true,x",
        "b.c": "2.5",
    }
