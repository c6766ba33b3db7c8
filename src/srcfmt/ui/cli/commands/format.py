"""src/srcfmt/ui/cli/commands/format.py
What: Execute formatting runs for a project via the CLI.
Why: Bridge parsed arguments and srcfmt.toml with the application service.
"""

from typing import override

from srcfmt.application.services.format_service import FormatOverrides, build_request
from srcfmt.config.config import Config
from srcfmt.features.formatting.usecases.processing_types import RunSummary
from srcfmt.platform.logging import setup_logger
from srcfmt.ui.cli.commands.executor import CommandExecutor


class FormatCommand(CommandExecutor):
    """Command for formatting the configured source directories."""

    @override
    def execute(self) -> RunSummary | None:
        """Load configuration, run the formatter, and display the outcome.

        Raises:
            ConfigurationError: If the configuration or run parameters are invalid.
        """
        config = Config.load(self.args.config_path)
        log_file = config.resolve_path(config.log_file, self.args.project_root)
        if log_file is not None:
            _ = setup_logger(log_file=log_file, console_level=self.args.log_level)

        overrides = FormatOverrides(
            line_ending=self.args.line_ending,
            encoding=self.args.encoding,
            engine=self.args.engine,
            includes=self.args.includes,
            excludes=self.args.excludes,
            jobs=self.args.jobs,
            skip=self.args.skip,
            extra_options=self.args.options,
        )
        request = build_request(config, self.args.project_root, overrides)

        summary = self.progress_display.run_with_service(
            self.app,
            request,
            enabled=not self.args.quiet,
        )
        self.display_results(summary)
        return summary
