# Where: srcfmt.features.formatting.__init__
# What: Expose the formatting run controller and its shared dataclasses.
# Why: Provide a cohesive import surface for the application and UI layers.

from .usecases import (
    FailureKind,
    FileResult,
    FormatEvent,
    FormatRequest,
    FormatRunController,
    OutcomeKind,
    RunSummary,
)

__all__ = [
    "FailureKind",
    "FileResult",
    "FormatEvent",
    "FormatRequest",
    "FormatRunController",
    "OutcomeKind",
    "RunSummary",
]
