"""src/srcfmt/ui/cli/commands/executor.py
What: Provide shared wiring for CLI command executors.
Why: Reuse the application service and presentation helpers across commands.
"""

from abc import ABC, abstractmethod

from srcfmt.application.services.format_service import FormatSourcesService
from srcfmt.features.formatting.usecases.processing_types import RunSummary
from srcfmt.ui.cli.args.options import FormatArgs
from srcfmt.ui.cli.display.progress import ProgressDisplay
from srcfmt.ui.cli.display.result import ResultDisplay


class CommandExecutor(ABC):
    """Base class for command execution."""

    args: FormatArgs
    app: FormatSourcesService
    progress_display: ProgressDisplay
    result_display: ResultDisplay

    def __init__(self, args: FormatArgs, app: FormatSourcesService | None = None) -> None:
        """Initialize command executor.

        Args:
            args: Command line arguments.
            app: Application service; a default one is built when omitted.
        """
        self.args = args
        self.app = app or FormatSourcesService()
        self.progress_display = ProgressDisplay()
        self.result_display = ResultDisplay()

    @abstractmethod
    def execute(self) -> RunSummary | None:
        """Execute the command.

        Returns:
            The run summary, or ``None`` when the run was skipped.
        """
        pass

    def display_results(self, summary: RunSummary | None) -> None:
        if summary is None:
            self.result_display.show_skipped(quiet=self.args.quiet)
            return
        self.result_display.show_results(summary, quiet=self.args.quiet)
