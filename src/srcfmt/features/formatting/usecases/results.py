"""Summary: Aggregate per-file outcomes into run-level counters.
Why: Workers return FileResult values; only the controller thread folds them together."""

from __future__ import annotations

import time
from collections.abc import Callable

from .processing_types import FileResult, OutcomeKind, RunSummary


class ResultCollector:
    """Counts formatted, failed, and skipped files for one run."""

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock: Callable[[], float] = clock
        self._start: float = clock()
        self.formatted: int = 0
        self.failed: int = 0
        self.skipped: int = 0
        self.results: list[FileResult] = []

    def record(self, result: FileResult) -> None:
        """Fold one file's outcome into the counters."""

        self.results.append(result)
        if result.outcome is OutcomeKind.FORMATTED:
            self.formatted += 1
        elif result.outcome is OutcomeKind.FAILED:
            self.failed += 1
        else:
            self.skipped += 1

    def elapsed_seconds(self) -> float:
        return self._clock() - self._start

    def summary(self) -> RunSummary:
        """Return an immutable snapshot of the counters and elapsed time."""

        return RunSummary(
            formatted=self.formatted,
            failed=self.failed,
            skipped=self.skipped,
            elapsed_seconds=self.elapsed_seconds(),
            results=list(self.results),
        )


__all__ = ["ResultCollector"]
