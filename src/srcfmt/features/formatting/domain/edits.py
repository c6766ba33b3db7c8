"""
Summary: Text edits returned by formatting engines and the document they apply to.
Why: Engines describe changes as replacements; the orchestrator materializes them in one place.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


class EditApplicationError(Exception):
    """Raised when a set of edits cannot be applied to a document."""


class BadLocationError(EditApplicationError):
    """An edit points outside the document."""


class MalformedEditsError(EditApplicationError):
    """Two edits overlap, so their combined result is undefined."""


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Replace ``length`` characters at ``offset`` of the original text with ``text``."""

    offset: int
    length: int
    text: str

    @property
    def end(self) -> int:
        return self.offset + self.length


class Document:
    """Mutable text buffer that applies edits expressed against its current content."""

    def __init__(self, text: str) -> None:
        self._text: str = text

    def get(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def apply(self, edits: Iterable[TextEdit]) -> str:
        """Apply ``edits`` atomically and return the new content.

        Edits are positioned against the content before this call. Insertions
        sharing an offset keep their given order.

        Raises:
            BadLocationError: If an edit falls outside the document.
            MalformedEditsError: If two edits overlap.
        """
        ordered = sorted(enumerate(edits), key=lambda item: (item[1].offset, item[0]))
        length = len(self._text)
        pieces: list[str] = []
        cursor = 0
        for _, edit in ordered:
            if edit.offset < 0 or edit.length < 0 or edit.end > length:
                raise BadLocationError(
                    f"Edit [{edit.offset}, {edit.end}) is outside document of length {length}"
                )
            if edit.offset < cursor:
                raise MalformedEditsError(
                    f"Edit at offset {edit.offset} overlaps a previous edit ending at {cursor}"
                )
            pieces.append(self._text[cursor:edit.offset])
            pieces.append(edit.text)
            cursor = edit.end
        pieces.append(self._text[cursor:])
        self._text = "".join(pieces)
        return self._text


__all__ = [
    "BadLocationError",
    "Document",
    "EditApplicationError",
    "MalformedEditsError",
    "TextEdit",
]
