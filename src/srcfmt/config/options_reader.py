"""Summary: Read formatter options documents into flat string-keyed maps.
Why: Engines consume plain ``dict[str, str]`` options regardless of the document layout.
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from srcfmt.config.errors import OptionsDocumentError
from srcfmt.platform.logging import logger

OPTIONS_TABLE = "formatter"


def read_options_document(path: Path) -> dict[str, str]:
    """Parse the TOML document at ``path`` into a flat option map.

    The ``[formatter]`` table is used when present, otherwise the whole
    document. Nested tables become dotted keys and every value is rendered
    as a string.

    Raises:
        OptionsDocumentError: If the document is missing, unreadable, or invalid.
    """
    if not path.exists():
        raise OptionsDocumentError(path, "cannot be found")
    if not path.is_file():
        raise OptionsDocumentError(path, "does not exist")

    try:
        with open(path, "rb") as handle:
            document = tomllib.load(handle)
    except OSError as exc:
        raise OptionsDocumentError(path, f"cannot be read: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise OptionsDocumentError(path, f"cannot be parsed: {exc}") from exc

    table = document.get(OPTIONS_TABLE, document)
    if not isinstance(table, Mapping):
        raise OptionsDocumentError(path, f"has a non-table [{OPTIONS_TABLE}] entry")

    options = flatten_options(table)
    logger.debug("Read %d formatter option(s) from %s", len(options), path)
    return options


def flatten_options(table: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten nested mappings into dotted keys with string values."""

    flat: dict[str, str] = {}
    for key, value in table.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(flatten_options(value, prefix=f"{dotted}."))
        else:
            flat[dotted] = _stringify(value)
    return flat


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_stringify(item) for item in value)
    return str(value)


__all__ = ["OPTIONS_TABLE", "flatten_options", "read_options_document"]
