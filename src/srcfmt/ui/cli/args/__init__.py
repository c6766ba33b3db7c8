"""Command line argument handling package."""

from srcfmt.ui.cli.args.options import CLIArgs, FormatArgs, InitArgs
from srcfmt.ui.cli.args.parser import ArgumentParser

__all__ = ["ArgumentParser", "CLIArgs", "FormatArgs", "InitArgs"]
