"""Command line interface package."""

from srcfmt.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
