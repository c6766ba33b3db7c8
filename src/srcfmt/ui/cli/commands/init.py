"""src/srcfmt/ui/cli/commands/init.py
What: Write a commented default configuration file.
Why: Give new projects a starting srcfmt.toml with every setting documented.
"""

from __future__ import annotations

from typing import final

from rich.console import Console
from rich.markup import escape

from srcfmt.config.config import Config
from srcfmt.ui.cli.args.options import InitArgs


@final
class InitCommand:
    """Create ``srcfmt.toml`` in the project directory."""

    def __init__(self, args: InitArgs, *, console: Console | None = None) -> None:
        self._args = args
        self._console = console or Console()

    def execute(self) -> bool:
        """Write the default configuration.

        Returns:
            bool: ``False`` when the file exists and ``--force`` was not given.
        """
        created = Config().save(self._args.config_path, overwrite=self._args.force)
        if not created:
            self._console.print(
                f"[yellow]{escape(str(self._args.config_path))} already exists; "
                "use --force to overwrite.[/yellow]"
            )
        return created
