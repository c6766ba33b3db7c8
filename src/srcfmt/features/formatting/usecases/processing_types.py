"""src/srcfmt/features/formatting/usecases/processing_types.py
Where: Formatting feature usecases layer.
What: Shared enums and dataclasses for the per-file reformat flow.
Why: Keep the orchestrator and controller lean by centralising type definitions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path


class FormatEvent(StrEnum):
    """Structured event identifiers for formatting logs."""

    RUN_SKIPPED = "format.run.skipped"
    RUN_NO_FILES = "format.run.no_files"
    RUN_START = "format.run.start"
    RUN_COMPLETE = "format.run.complete"
    FILE_START = "format.file.start"
    FILE_FORMATTED = "format.file.formatted"
    FILE_SKIP_UNCHANGED = "format.file.skip.unchanged"
    FILE_SKIP_CACHED = "format.file.skip.cached"
    FILE_SKIP_NOT_APPLICABLE = "format.file.skip.not_applicable"
    FILE_ERROR = "format.file.error"
    CACHE_LOAD_ERROR = "format.cache.load_error"
    CACHE_PERSIST_ERROR = "format.cache.persist_error"


class OutcomeKind(StrEnum):
    """Terminal state of one file in one run."""

    FORMATTED = "formatted"
    SKIPPED_UNCHANGED = "skipped_unchanged"
    SKIPPED_ALREADY_CACHED = "skipped_already_cached"
    SKIPPED_NOT_APPLICABLE = "skipped_not_applicable"
    FAILED = "failed"

    @property
    def is_skip(self) -> bool:
        return self in _SKIP_KINDS


_SKIP_KINDS = frozenset(
    {
        OutcomeKind.SKIPPED_UNCHANGED,
        OutcomeKind.SKIPPED_ALREADY_CACHED,
        OutcomeKind.SKIPPED_NOT_APPLICABLE,
    }
)


class FailureKind(StrEnum):
    """Which step of the per-file flow failed."""

    READ = "read"
    ENCODING = "encoding"
    ENGINE = "engine"
    EDITS = "edits"
    WRITE = "write"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True, slots=True)
class FileResult:
    """Outcome of processing a single candidate file."""

    source_path: Path
    cache_key: str
    outcome: OutcomeKind
    failure_kind: FailureKind | None = None
    error_message: str | None = None
    original_hash: str | None = None
    formatted_hash: str | None = None

    @property
    def success(self) -> bool:
        return self.outcome is not OutcomeKind.FAILED


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Aggregate counters reported at the end of a run."""

    formatted: int = 0
    failed: int = 0
    skipped: int = 0
    elapsed_seconds: float = 0.0
    results: list[FileResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.formatted + self.failed + self.skipped

    def log_extra(self) -> dict[str, int | float]:
        """Return a dictionary suitable for structured logging extras."""

        return {
            "total_files": self.total,
            "formatted": self.formatted,
            "skipped": self.skipped,
            "failed": self.failed,
            "duration_seconds": round(self.elapsed_seconds, 4),
        }


__all__ = [
    "FailureKind",
    "FileResult",
    "FormatEvent",
    "OutcomeKind",
    "RunSummary",
]
