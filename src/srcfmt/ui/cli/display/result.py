"""src/srcfmt/ui/cli/display/result.py
What: Render the user-facing summary of a formatting run.
Why: Keep console output formatting consistent across the interface.
"""

from __future__ import annotations

from typing import final

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from srcfmt.features.formatting.usecases.processing_types import OutcomeKind, RunSummary

_OUTCOME_LABELS: dict[OutcomeKind, tuple[str, str]] = {
    OutcomeKind.FORMATTED: ("Formatted", "green"),
    OutcomeKind.SKIPPED_UNCHANGED: ("Already formatted (unchanged)", "blue"),
    OutcomeKind.SKIPPED_ALREADY_CACHED: ("Already formatted (cached)", "blue"),
    OutcomeKind.SKIPPED_NOT_APPLICABLE: ("Cannot be formatted", "yellow"),
    OutcomeKind.FAILED: ("Failed", "red"),
}


@final
class ResultDisplay:
    """Handles result display in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_results(self, summary: RunSummary, quiet: bool = False) -> None:
        """Display a run summary.

        Args:
            summary: Counters and per-file results of the run.
            quiet: Whether to suppress non-error output.
        """
        if quiet:
            self._show_failures(summary)
            return

        table = Table(title="Formatting Summary", box=box.SIMPLE_HEAVY, show_footer=True)
        table.add_column("Outcome", footer="Total")
        table.add_column("Files", justify="right", footer=str(summary.total))

        for outcome, (label, style) in _OUTCOME_LABELS.items():
            count = sum(1 for result in summary.results if result.outcome is outcome)
            if count:
                table.add_row(f"[{style}]{label}[/{style}]", str(count))

        self.console.print(table)
        self.console.print(f"Approximate time taken: {summary.elapsed_seconds:.2f}s")
        self._show_failures(summary)

    def show_skipped(self, quiet: bool = False) -> None:
        if not quiet:
            self.console.print("[yellow]Formatting is skipped.[/yellow]")

    def _show_failures(self, summary: RunSummary) -> None:
        failures = [result for result in summary.results if not result.success]
        if not failures:
            return
        self.console.print(f"[red]Failed: {len(failures)}[/red]")
        for failed in failures:
            kind = failed.failure_kind.value if failed.failure_kind else "unknown"
            self.console.print(
                f"[red]  • {escape(str(failed.source_path))} ({kind}): "
                f"{escape(failed.error_message or '')}[/red]"
            )
