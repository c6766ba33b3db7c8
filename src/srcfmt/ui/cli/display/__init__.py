"""Display management for CLI interface."""

from srcfmt.ui.cli.display.progress import ProgressDisplay
from srcfmt.ui.cli.display.result import ResultDisplay

__all__ = ["ProgressDisplay", "ResultDisplay"]
