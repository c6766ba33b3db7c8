"""Summary: Exceptions raised while resolving run-wide configuration.
Why: Let the CLI tell fatal configuration problems apart from per-file failures.
"""

from __future__ import annotations

from pathlib import Path


class ConfigurationError(Exception):
    """Raised when run-wide configuration is invalid; aborts before any file is touched."""


class OptionsDocumentError(ConfigurationError):
    """Raised when the formatter options document cannot be found, read, or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Options file [{path}] {reason}")
        self.path: Path = path
        self.reason: str = reason


__all__ = ["ConfigurationError", "OptionsDocumentError"]
