"""Use cases for the formatting feature: per-file flow, run control, and cache model."""

from .file_formatter import FileFormatter
from .file_selector import matches_pattern, select_files
from .hash_cache import HashCache, cache_key_for, content_hash
from .ports import HashCacheStorePort
from .processing_types import FailureKind, FileResult, FormatEvent, OutcomeKind, RunSummary
from .results import ResultCollector
from .run_controller import FormatRequest, FormatRunController, resolve_engine_options

__all__ = [
    "FailureKind",
    "FileFormatter",
    "FileResult",
    "FormatEvent",
    "FormatRequest",
    "FormatRunController",
    "HashCache",
    "HashCacheStorePort",
    "OutcomeKind",
    "ResultCollector",
    "RunSummary",
    "cache_key_for",
    "content_hash",
    "matches_pattern",
    "resolve_engine_options",
    "select_files",
]
