"""Command line interface for srcfmt."""

import sys
from typing import final

from srcfmt.config.errors import ConfigurationError
from srcfmt.platform.logging import logger
from srcfmt.ui.cli.args import ArgumentParser
from srcfmt.ui.cli.args.options import CLIArgs, FormatArgs, InitArgs
from srcfmt.ui.cli.commands import FormatCommand, InitCommand


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Process command line arguments.

        Per-file formatting failures do not change the exit status; only
        configuration errors (exit 1) and interruption (exit 130) do.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)

            if isinstance(args, FormatArgs):
                _ = FormatCommand(args).execute()
                return

            assert isinstance(args, InitArgs)
            if not InitCommand(args).execute():
                sys.exit(1)
            return

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except ConfigurationError as e:
            logger.error("%s", e)
            sys.exit(1)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Note that underlying
        command processing may call ``sys.exit(...)`` on errors, so this
        return is only reached when processing completes successfully.
    """
    CommandProcessor.process_command()
    return 0
