"""Logger configuration bootstrap.

Where: platform/logging/config.py
What: Configure the ``srcfmt`` logger with a Rich console handler and an optional log file.
Why: Keep handler rendering separate from setup so configuration stays concise.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Final, override

from rich.console import Console

from .handlers import FormatEventRichHandler


LOGGER_NAME: Final[str] = "srcfmt"
LOG_FILE_MAX_BYTES: Final[int] = 10 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 5


class FormatEventFileFormatter(logging.Formatter):
    """Plain formatter that tags structured records with their ``format_event``."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    @override
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        event = getattr(record, "format_event", None)
        if isinstance(event, str):
            return f"{line} [{event}]"
        return line


def setup_logger(
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> logging.Logger:
    """Set up and configure the application logger.

    Args:
        log_file: Path to the log file. If None, only console logging is enabled.
        console_level: Logging level for console output.
        file_level: Logging level for file output.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    console = Console(stderr=True, soft_wrap=True)
    console_handler = FormatEventRichHandler(console=console)
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    if log_file is not None:
        resolved_log_file = Path(log_file).expanduser().resolve()
        os.makedirs(resolved_log_file.parent, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            resolved_log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(FormatEventFileFormatter())
        logger.addHandler(file_handler)

    return logger


logger: Final[logging.Logger] = setup_logger()


__all__ = ["FormatEventFileFormatter", "LOGGER_NAME", "setup_logger", "logger"]
