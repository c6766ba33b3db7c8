"""Command execution package for CLI."""

from srcfmt.ui.cli.commands.executor import CommandExecutor
from srcfmt.ui.cli.commands.format import FormatCommand
from srcfmt.ui.cli.commands.init import InitCommand

__all__ = ["CommandExecutor", "FormatCommand", "InitCommand"]
