"""Summary: Pure domain types for the formatting feature.
Why: Give engines and use cases a shared vocabulary free of I/O.
"""

from .edits import (
    BadLocationError,
    Document,
    EditApplicationError,
    MalformedEditsError,
    TextEdit,
)
from .line_endings import (
    LineEndingMode,
    determine_line_ending,
    effective_line_separator,
    resolve_line_separator,
)

__all__ = [
    "BadLocationError",
    "Document",
    "EditApplicationError",
    "LineEndingMode",
    "MalformedEditsError",
    "TextEdit",
    "determine_line_ending",
    "effective_line_separator",
    "resolve_line_separator",
]
