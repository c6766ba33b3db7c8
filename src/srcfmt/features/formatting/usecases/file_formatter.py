"""Summary: Per-file reformat decision flow: hash, cache check, format, write.
Why: Isolate the skip/format/write/fail state machine from run orchestration."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from srcfmt.platform.filesystem import read_source_text, write_source_text
from srcfmt.platform.logging import logger

from ..domain.edits import Document, EditApplicationError
from ..domain.line_endings import LineEndingMode, effective_line_separator
from ..engines.base import DOCUMENT_SCOPE, FormattingEngine, FormattingEngineError
from .hash_cache import HashCache, cache_key_for, content_hash
from .processing_types import FailureKind, FileResult, FormatEvent, OutcomeKind


class FileFormatter:
    """Decide and apply the outcome for one file at a time.

    The only state shared between calls is the hash cache, which is safe to
    update from several worker threads.
    """

    def __init__(
        self,
        *,
        engine: FormattingEngine,
        cache: HashCache,
        base_dir: Path,
        encoding: str,
        line_ending: LineEndingMode,
        platform_separator: str = os.linesep,
    ) -> None:
        self.engine: FormattingEngine = engine
        self.cache: HashCache = cache
        self.base_dir: Path = base_dir.resolve()
        self.encoding: str = encoding
        self.line_ending: LineEndingMode = line_ending
        self.platform_separator: str = platform_separator

    def format_file(
        self,
        path: Path,
        *,
        sequence: int | None = None,
        total: int | None = None,
    ) -> FileResult:
        """Run the reformat flow for ``path`` and return its outcome.

        Errors reading, formatting, or writing this file become a ``FAILED``
        result and leave its cache entry as it was.
        """
        key = cache_key_for(path, self.base_dir)
        context: dict[str, Any] = {
            "source_path": path,
            "base_dir": self.base_dir,
            "sequence": sequence,
            "total_files": total,
            "cache_key": key,
        }
        logger.debug("Processing file: %s", path, extra=_extra(FormatEvent.FILE_START, context))

        try:
            text = read_source_text(path, self.encoding)
        except UnicodeError as exc:
            return self._fail(path, key, FailureKind.ENCODING, exc, context)
        except OSError as exc:
            return self._fail(path, key, FailureKind.READ, exc, context)

        try:
            original_hash = content_hash(text, self.encoding)
        except UnicodeError as exc:
            return self._fail(path, key, FailureKind.ENCODING, exc, context)

        if self.cache.get(key) == original_hash:
            logger.debug(
                "File is already formatted: %s",
                path,
                extra=_extra(FormatEvent.FILE_SKIP_CACHED, context),
            )
            return FileResult(
                path,
                key,
                OutcomeKind.SKIPPED_ALREADY_CACHED,
                original_hash=original_hash,
                formatted_hash=original_hash,
            )

        separator = effective_line_separator(
            self.line_ending, text, platform_default=self.platform_separator
        )

        try:
            edits = self.engine.format(DOCUMENT_SCOPE, text, 0, len(text), 0, separator)
        except FormattingEngineError as exc:
            return self._fail(path, key, FailureKind.ENGINE, exc, context)

        if edits is None:
            logger.debug(
                "Code cannot be formatted: %s (possibly unmatched compiler source version)",
                path,
                extra=_extra(FormatEvent.FILE_SKIP_NOT_APPLICABLE, context),
            )
            return FileResult(
                path, key, OutcomeKind.SKIPPED_NOT_APPLICABLE, original_hash=original_hash
            )

        try:
            formatted = Document(text).apply(edits)
        except EditApplicationError as exc:
            return self._fail(path, key, FailureKind.EDITS, exc, context)

        try:
            formatted_hash = content_hash(formatted, self.encoding)
        except UnicodeError as exc:
            return self._fail(path, key, FailureKind.ENCODING, exc, context)

        if formatted_hash == original_hash:
            self.cache.put(key, formatted_hash)
            logger.debug(
                "Equal hash code, not writing result to file: %s",
                path,
                extra=_extra(FormatEvent.FILE_SKIP_UNCHANGED, context),
            )
            return FileResult(
                path,
                key,
                OutcomeKind.SKIPPED_UNCHANGED,
                original_hash=original_hash,
                formatted_hash=formatted_hash,
            )

        try:
            write_source_text(path, formatted, self.encoding)
        except OSError as exc:
            return self._fail(path, key, FailureKind.WRITE, exc, context)

        self.cache.put(key, formatted_hash)
        logger.info(
            "Formatted %s",
            path,
            extra=_extra(FormatEvent.FILE_FORMATTED, context),
        )
        return FileResult(
            path,
            key,
            OutcomeKind.FORMATTED,
            original_hash=original_hash,
            formatted_hash=formatted_hash,
        )

    def _fail(
        self,
        path: Path,
        key: str,
        kind: FailureKind,
        exc: BaseException,
        context: dict[str, Any],
    ) -> FileResult:
        error_message = str(exc) if str(exc) else type(exc).__name__
        logger.warning(
            "Failed to format %s (%s): %s",
            path,
            kind.value,
            error_message,
            extra=_extra(
                FormatEvent.FILE_ERROR,
                context,
                failure_kind=kind.value,
                error_message=error_message,
            ),
        )
        return FileResult(
            path,
            key,
            OutcomeKind.FAILED,
            failure_kind=kind,
            error_message=error_message,
        )


def _extra(event: FormatEvent, context: dict[str, Any], **more: Any) -> dict[str, Any]:
    extra: dict[str, Any] = {"format_event": event.value}
    for key, value in {**context, **more}.items():
        extra[key] = str(value) if isinstance(value, Path) else value
    return extra


__all__ = ["FileFormatter"]
