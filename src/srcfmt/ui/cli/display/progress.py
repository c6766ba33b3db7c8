"""Progress display functionality for CLI."""

from pathlib import Path
from typing import Any, Callable, Protocol, final, runtime_checkable

from rich.console import Console
from rich.progress import Progress, TaskID

from srcfmt.features.formatting.usecases.processing_types import RunSummary
from srcfmt.features.formatting.usecases.run_controller import FormatRequest
from srcfmt.platform.logging import FormatEventRichHandler, logger


@runtime_checkable
class FormatServiceLike(Protocol):
    """Protocol for application services that can run a formatting pass with progress."""

    def run(
        self,
        request: FormatRequest,
        progress_callback: Callable[[int, int, Path], None] | None = None,
    ) -> RunSummary | None:
        ...


@final
class ProgressDisplay:
    """Handles progress display in CLI."""

    def run_with_service(
        self,
        app: FormatServiceLike,
        request: FormatRequest,
        *,
        enabled: bool = True,
    ) -> RunSummary | None:
        """Run a formatting pass via the application service with a progress bar.

        Args:
            app: Application service instance used to run the pass.
            request: Format run parameters.
            enabled: Whether to render the progress bar at all.

        Returns:
            The run summary, or ``None`` when the run was skipped.
        """
        if not enabled:
            return app.run(request)

        progress_console: Console | None = None
        for handler in logger.handlers:
            if isinstance(handler, FormatEventRichHandler):
                progress_console = handler.console
                break

        progress_kwargs: dict[str, Any] = {
            "transient": True,
            "redirect_stdout": False,
            "redirect_stderr": False,
        }
        if progress_console is not None:
            progress_kwargs["console"] = progress_console

        with Progress(**progress_kwargs) as progress:
            task_id: TaskID | None = None
            last_count = 0

            def _cb(processed: int, total: int, current_file: Path) -> None:
                nonlocal task_id, last_count
                _ = current_file  # consumed via logging elsewhere
                if task_id is None:
                    task_id = progress.add_task("[cyan]Formatting files...", total=total)
                advance = max(processed - last_count, 0)
                progress.update(
                    task_id,
                    advance=advance,
                    description=f"[cyan]Formatting files... {processed}/{total}",
                )
                last_count = processed

            return app.run(request, progress_callback=_cb)


__all__ = ["FormatServiceLike", "ProgressDisplay"]
