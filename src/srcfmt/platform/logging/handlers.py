"""Rich console handler rendering structured formatting events."""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.markup import escape
from rich.style import Style
from rich.text import Text


class FormatEventRichHandler(RichHandler):
    """Rich handler that renders ``format_event`` records with icons and compact paths."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "format.run.start": ("🚀", "cyan"),
        "format.run.complete": ("✅", "green"),
        "format.run.no_files": ("ℹ️", "yellow"),
        "format.run.skipped": ("⏭️", "yellow"),
        "format.file.formatted": ("✏️", "green"),
        "format.file.skip.unchanged": ("↪️", "blue"),
        "format.file.skip.cached": ("♻️", "blue"),
        "format.file.skip.not_applicable": ("⚠️", "yellow"),
        "format.file.error": ("⛔", "red"),
        "format.cache.load_error": ("⚠️", "yellow"),
        "format.cache.persist_error": ("⚠️", "yellow"),
    }
    _FILE_PREFIXES: ClassVar[dict[str, str]] = {
        "format.file.formatted": "Formatted ",
        "format.file.skip.unchanged": "Unchanged ",
        "format.file.skip.cached": "Already formatted ",
        "format.file.skip.not_applicable": "Cannot format ",
        "format.file.error": "Failed ",
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 4

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = True
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str, base: str | None = None) -> Text:
        """Format a path relative to ``base`` with magenta separators.

        Paths deeper than the segment limit keep only their trailing parts,
        prefixed by an ellipsis.
        """
        pure_path = self._to_pure_path(path)
        display_path: PurePath = pure_path
        if base:
            base_path = self._to_pure_path(base)
            try:
                relative_path = pure_path.relative_to(base_path)
            except ValueError:
                relative_path = None
            if relative_path is not None and str(relative_path) not in {"", "."}:
                display_path = relative_path

        separator = "\\" if isinstance(display_path, PureWindowsPath) else "/"
        anchor = display_path.anchor
        body_parts = [part for part in display_path.parts if part and part != anchor]

        truncated = len(body_parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            body_parts = body_parts[-self._PATH_SEGMENT_LIMIT:]
            display_string = "…" + separator + separator.join(body_parts)
        else:
            display_string = anchor.rstrip("\\/") + (separator if anchor else "")
            display_string += separator.join(body_parts)

        text = Text()
        for char in display_string or ".":
            color = "magenta" if char in {separator, "…"} else "white"
            _ = text.append(char, style=Style(color=color))
        return text

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    def _render_event_message(self, record: logging.LogRecord) -> Text | None:
        """Render structured formatting events with dedicated styling."""

        event = getattr(record, "format_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))
        body = Text(style=Style(color=color))

        if event.startswith("format.file"):
            sequence = getattr(record, "sequence", None)
            total_files = getattr(record, "total_files", None)
            if isinstance(sequence, int) and sequence > 0:
                if isinstance(total_files, int) and total_files > 0:
                    _ = body.append(f"[{sequence}/{total_files}] ")
                else:
                    _ = body.append(f"[{sequence}] ")
            _ = body.append(self._FILE_PREFIXES.get(event, ""))
            source_path = getattr(record, "source_path", None)
            if source_path:
                _ = body.append_text(
                    self._format_path(str(source_path), base=getattr(record, "base_dir", None))
                )
            if event == "format.file.error":
                details = [
                    str(value)
                    for value in (
                        getattr(record, "failure_kind", None),
                        getattr(record, "error_message", None),
                    )
                    if value
                ]
                if details:
                    _ = body.append(" (" + ": ".join(details) + ")")
        elif event == "format.run.start":
            _ = body.append("Formatting started")
            total_files = getattr(record, "total_files", None)
            if isinstance(total_files, int):
                _ = body.append(f" [files={total_files}]")
        elif event == "format.run.complete":
            _ = body.append("Formatting complete")
            metrics: list[str] = []
            for name in ("formatted", "skipped", "failed"):
                value = getattr(record, name, None)
                if isinstance(value, int):
                    metrics.append(f"{name}={value}")
            duration = getattr(record, "duration_seconds", None)
            if isinstance(duration, (int, float)):
                metrics.append(f"duration={duration:.2f}s")
            if metrics:
                _ = body.append(" [" + ", ".join(metrics) + "]")
        else:
            _ = body.append(record.getMessage())

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        event_text = self._render_event_message(record)
        if event_text is not None:
            return event_text
        # Free-text messages carry paths and exception text, never markup.
        return super().render_message(record, escape(message))


__all__ = ["FormatEventRichHandler"]
