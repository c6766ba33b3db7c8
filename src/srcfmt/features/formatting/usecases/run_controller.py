"""src/srcfmt/features/formatting/usecases/run_controller.py
What: Validate run configuration, select files, drive the per-file flow, persist the cache.
Why: One place owns the run lifecycle so the cache is loaded and stored exactly once.
"""

from __future__ import annotations

import codecs
import locale
import logging
import os
from collections.abc import Callable, Collection, Iterator, Mapping, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from srcfmt.config.config import DEFAULT_COMPILER_VERSION, DEFAULT_SOURCE_DIRECTORIES
from srcfmt.config.errors import ConfigurationError
from srcfmt.config.options_reader import read_options_document
from srcfmt.platform.logging import logger

from ..domain.line_endings import LineEndingMode
from ..engines.base import (
    COMPILER_COMPLIANCE,
    COMPILER_OPTION_KEYS,
    COMPILER_SOURCE,
    COMPILER_TARGET_PLATFORM,
    FormattingEngine,
)
from .file_formatter import FileFormatter
from .file_selector import select_files
from .hash_cache import cache_key_for
from .ports import HashCacheStorePort
from .processing_types import FailureKind, FileResult, FormatEvent, OutcomeKind, RunSummary
from .results import ResultCollector

EngineFactory = Callable[[str, Mapping[str, str]], FormattingEngine]
CacheStoreFactory = Callable[[Path, str], HashCacheStorePort]
ProgressCallback = Callable[[int, int, Path], None]


@dataclass(frozen=True)
class FormatRequest:
    """Run-wide parameters, not yet validated.

    Attributes:
        base_dir: Directory cache keys are relative to.
        build_dir: Directory holding the persisted hash cache.
        directories: Source roots to scan; empty means ``src`` and ``tests``.
        encoding: Source file encoding; ``None`` selects the platform encoding.
        line_ending: One of AUTO, KEEP, LF, CRLF, CR (case-insensitive).
        options_file: Optional options document merged into the engine options.
        override_config_compiler_version: Ignore compiler keys from ``options_file``.
    """

    base_dir: Path
    build_dir: Path
    directories: tuple[Path, ...] = ()
    includes: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()
    encoding: str | None = None
    line_ending: str = LineEndingMode.AUTO.value
    engine: str = "whitespace"
    compiler_source: str = DEFAULT_COMPILER_VERSION
    compiler_compliance: str = DEFAULT_COMPILER_VERSION
    compiler_target_platform: str = DEFAULT_COMPILER_VERSION
    options_file: Path | None = None
    override_config_compiler_version: bool = False
    skip: bool = False
    cache_backend: str = "properties"
    jobs: int = 1
    extra_options: Mapping[str, str] = field(default_factory=dict)


def resolve_engine_options(request: FormatRequest) -> dict[str, str]:
    """Build the engine option map from the request and its options document.

    Compiler versions from the request are the base; the document overrides
    them unless ``override_config_compiler_version`` is set.
    """
    options: dict[str, str] = {
        COMPILER_SOURCE: request.compiler_source,
        COMPILER_COMPLIANCE: request.compiler_compliance,
        COMPILER_TARGET_PLATFORM: request.compiler_target_platform,
    }
    if request.options_file is not None:
        document = read_options_document(request.options_file)
        if request.override_config_compiler_version:
            for key in COMPILER_OPTION_KEYS:
                _ = document.pop(key, None)
        options.update(document)
    options.update(request.extra_options)
    return options


def validate_encoding(encoding: str | None) -> str:
    """Return a usable encoding name, defaulting to the platform encoding."""

    if not encoding:
        platform_encoding = locale.getpreferredencoding(False)
        logger.warning(
            "File encoding has not been set, using platform encoding (%s) to format "
            "source files, i.e. build is platform dependent!",
            platform_encoding,
        )
        return platform_encoding
    try:
        _ = codecs.lookup(encoding)
    except LookupError as exc:
        raise ConfigurationError(f"Encoding '{encoding}' is not supported") from exc
    logger.info("Using '%s' encoding to format source files.", encoding)
    return encoding


def validate_line_ending(value: str) -> LineEndingMode:
    try:
        return LineEndingMode.from_user_input(value)
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc


def validate_registered_name(kind: str, name: str, known: Collection[str] | None) -> None:
    """Reject ``name`` when ``known`` is given and does not list it.

    Names are compared case-insensitively, the way the registries look them up.
    """

    if known is None or name.strip().lower() in known:
        return
    listed = ", ".join(sorted(known))
    raise ConfigurationError(f"Unknown {kind} {name!r} (expected one of {listed})")


def resolve_source_directories(request: FormatRequest) -> list[Path]:
    """Return the existing source directories; none at all is a configuration error."""

    candidates = list(request.directories) or [
        request.base_dir / name for name in DEFAULT_SOURCE_DIRECTORIES
    ]
    existing = [directory for directory in candidates if directory.is_dir()]
    for missing in (directory for directory in candidates if not directory.is_dir()):
        logger.debug("Ignoring missing source directory %s", missing)
    if not existing:
        listed = ", ".join(str(directory) for directory in candidates)
        raise ConfigurationError(f"No valid source directories found (checked: {listed})")
    return existing


class FormatRunController:
    """Drive one formatting run over the selected files.

    ``engine_names`` and ``cache_backends`` list the names the factories
    accept; when given, the request is checked against them before any file
    is selected. ``None`` leaves the check to the factories.
    """

    def __init__(
        self,
        *,
        engine_factory: EngineFactory,
        cache_store_factory: CacheStoreFactory,
        platform_separator: str = os.linesep,
        engine_names: Collection[str] | None = None,
        cache_backends: Collection[str] | None = None,
    ) -> None:
        self._engine_factory: EngineFactory = engine_factory
        self._cache_store_factory: CacheStoreFactory = cache_store_factory
        self._platform_separator: str = platform_separator
        self._engine_names: Collection[str] | None = engine_names
        self._cache_backends: Collection[str] | None = cache_backends

    def run(
        self,
        request: FormatRequest,
        progress_callback: ProgressCallback | None = None,
    ) -> RunSummary | None:
        """Execute a run and return its summary, or ``None`` when skipped.

        Raises:
            ConfigurationError: Before any file is processed, when the request
                is invalid.
        """
        if request.skip:
            logger.info(
                "Formatting is skipped", extra={"format_event": FormatEvent.RUN_SKIPPED.value}
            )
            return None

        collector = ResultCollector()
        encoding = validate_encoding(request.encoding)
        line_ending = validate_line_ending(request.line_ending)
        if request.jobs < 1:
            raise ConfigurationError(f"jobs must be a positive integer; received {request.jobs}")
        validate_registered_name("formatting engine", request.engine, self._engine_names)
        validate_registered_name("cache backend", request.cache_backend, self._cache_backends)
        engine_options = resolve_engine_options(request)

        directories = resolve_source_directories(request)
        files = select_files(
            directories,
            request.includes,
            request.excludes,
            ignored_directories=[request.build_dir],
        )
        total = len(files)
        logger.info("Number of files to be formatted: %d", total)

        if total == 0:
            logger.info(
                "No files matched the include/exclude patterns",
                extra={"format_event": FormatEvent.RUN_NO_FILES.value},
            )
            return collector.summary()

        engine = self._engine_factory(request.engine, engine_options)
        store = self._cache_store_factory(request.build_dir, request.cache_backend)
        cache = store.load()
        formatter = FileFormatter(
            engine=engine,
            cache=cache,
            base_dir=request.base_dir,
            encoding=encoding,
            line_ending=line_ending,
            platform_separator=self._platform_separator,
        )

        logger.debug(
            "Formatting %d file(s) with engine %s",
            total,
            engine.name,
            extra={"format_event": FormatEvent.RUN_START.value, "total_files": total},
        )

        for index, result in enumerate(
            self._iter_results(formatter, files, request.base_dir, request.jobs), start=1
        ):
            collector.record(result)
            if progress_callback is not None:
                progress_callback(index, total, result.source_path)

        _ = store.persist(cache)

        summary = collector.summary()
        self._report(summary)
        return summary

    def _iter_results(
        self,
        formatter: FileFormatter,
        files: Sequence[Path],
        base_dir: Path,
        jobs: int,
    ) -> Iterator[FileResult]:
        """Yield results in file-list order, sequentially or from a worker pool."""

        total = len(files)
        if jobs == 1:
            for index, path in enumerate(files, start=1):
                yield self._guarded(formatter, path, index, total, base_dir)
            return

        with ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="srcfmt") as executor:
            futures: list[Future[FileResult]] = [
                executor.submit(self._guarded, formatter, path, index, total, base_dir)
                for index, path in enumerate(files, start=1)
            ]
            for future in futures:
                yield future.result()

    @staticmethod
    def _guarded(
        formatter: FileFormatter,
        path: Path,
        sequence: int,
        total: int,
        base_dir: Path,
    ) -> FileResult:
        try:
            return formatter.format_file(path, sequence=sequence, total=total)
        except Exception as exc:
            error_message = str(exc) if str(exc) else type(exc).__name__
            key = cache_key_for(path, base_dir)
            logger.error(
                "Unhandled error formatting file %d/%d %s: %s",
                sequence,
                total,
                path,
                error_message,
                exc_info=True,
                extra={
                    "format_event": FormatEvent.FILE_ERROR.value,
                    "source_path": str(path),
                    "base_dir": str(base_dir),
                    "sequence": sequence,
                    "total_files": total,
                    "cache_key": key,
                    "failure_kind": FailureKind.UNEXPECTED.value,
                    "error_message": error_message,
                },
            )
            return FileResult(
                path,
                key,
                OutcomeKind.FAILED,
                failure_kind=FailureKind.UNEXPECTED,
                error_message=error_message,
            )

    @staticmethod
    def _report(summary: RunSummary) -> None:
        logger.info("Successfully formatted: %d file(s)", summary.formatted)
        logger.info("Fail to format        : %d file(s)", summary.failed)
        logger.info("Skipped               : %d file(s)", summary.skipped)
        logger.info("Approximate time taken: %ds", int(summary.elapsed_seconds))
        logger.log(
            logging.DEBUG,
            "Formatting complete",
            extra={"format_event": FormatEvent.RUN_COMPLETE.value, **summary.log_extra()},
        )


__all__ = [
    "CacheStoreFactory",
    "EngineFactory",
    "FormatRequest",
    "FormatRunController",
    "ProgressCallback",
    "resolve_engine_options",
    "resolve_source_directories",
    "validate_encoding",
    "validate_line_ending",
    "validate_registered_name",
]
