"""Command line argument options."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, final


@final
@dataclass(slots=True)
class FormatArgs:
    """Command line arguments for the ``format`` subcommand."""

    command: Literal["format"]
    project_root: Path
    config_path: Path
    line_ending: str | None
    encoding: str | None
    engine: str | None
    includes: tuple[str, ...]
    excludes: tuple[str, ...]
    jobs: int | None
    skip: bool
    verbose: bool
    quiet: bool
    log_level: int
    options: dict[str, str] = field(default_factory=dict)


@final
@dataclass(slots=True)
class InitArgs:
    """Command line arguments for the ``init`` subcommand."""

    command: Literal["init"]
    project_root: Path
    config_path: Path
    force: bool


CLIArgs = FormatArgs | InitArgs

__all__ = ["CLIArgs", "FormatArgs", "InitArgs"]
