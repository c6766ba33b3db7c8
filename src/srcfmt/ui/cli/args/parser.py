"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from srcfmt.config.paths import default_config_path, detect_project_root
from srcfmt.platform.logging import logger, setup_logger
from srcfmt.ui.cli.args.options import CLIArgs, FormatArgs, InitArgs


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="srcfmt",
            description="srcfmt - Incrementally reformat source files, skipping unchanged ones.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        format_parser = subparsers.add_parser(
            "format",
            help="Format the configured source directories",
        )
        _ = format_parser.add_argument(
            "path",
            nargs="?",
            type=str,
            help="Project directory (defaults to the nearest directory with srcfmt.toml)",
            metavar="PATH",
        )
        _ = format_parser.add_argument(
            "--config",
            type=str,
            help="Configuration file (defaults to PATH/srcfmt.toml)",
            metavar="CONFIG",
        )
        _ = format_parser.add_argument(
            "--line-ending",
            type=str,
            help="Line endings after formatting: AUTO, KEEP, LF, CRLF or CR",
            metavar="MODE",
        )
        _ = format_parser.add_argument(
            "--encoding",
            type=str,
            help="Encoding used to read and write source files",
        )
        _ = format_parser.add_argument(
            "--engine",
            type=str,
            help="Formatting engine: whitespace, python or passthrough",
        )
        _ = format_parser.add_argument(
            "--include",
            action="append",
            default=[],
            metavar="PATTERN",
            help="Glob pattern of files to format (repeatable)",
        )
        _ = format_parser.add_argument(
            "--exclude",
            action="append",
            default=[],
            metavar="PATTERN",
            help="Glob pattern of files to leave alone (repeatable)",
        )
        _ = format_parser.add_argument(
            "--option",
            action="append",
            default=[],
            metavar="KEY=VALUE",
            help="Engine option, e.g. tabulation.char=space (repeatable)",
        )
        _ = format_parser.add_argument(
            "--jobs",
            type=int,
            help="Number of worker threads",
        )
        _ = format_parser.add_argument(
            "--skip",
            action="store_true",
            help="Skip formatting entirely",
        )
        verbosity = format_parser.add_mutually_exclusive_group()
        _ = verbosity.add_argument(
            "--verbose",
            action="store_true",
            help="Show per-file details",
        )
        _ = verbosity.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

        init_parser = subparsers.add_parser(
            "init",
            help="Write a default srcfmt.toml",
        )
        _ = init_parser.add_argument(
            "path",
            nargs="?",
            type=str,
            help="Project directory (defaults to the current directory)",
            metavar="PATH",
        )
        _ = init_parser.add_argument(
            "--force",
            action="store_true",
            help="Overwrite an existing configuration file",
        )

        return parser

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            Args: Processed command line arguments.

        Raises:
            SystemExit: If the project path is not a directory or a flag value is invalid.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        # Set log level based on verbosity flags
        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        _ = setup_logger(console_level=log_level)

        command: str = parsed_args.command

        if command == "format":
            return ArgumentParser._process_format(parsed_args, log_level)

        if command == "init":
            return ArgumentParser._process_init(parsed_args)

        logger.error("Unsupported command: %s", command)
        sys.exit(2)

    @staticmethod
    def _resolve_project_root(raw_path: str | None, *, detect: bool) -> Path:
        if raw_path is None:
            return detect_project_root() if detect else Path.cwd().resolve()

        project_root = Path(raw_path).expanduser()
        if not project_root.is_dir():
            logger.error("Project path does not exist or is not a directory: %s", project_root)
            sys.exit(1)
        return project_root.resolve()

    @staticmethod
    def _parse_options(raw_options: Sequence[str]) -> dict[str, str]:
        options: dict[str, str] = {}
        for raw in raw_options:
            key, separator, value = raw.partition("=")
            if not separator or not key.strip():
                logger.error("Engine options must look like KEY=VALUE; received %s", raw)
                sys.exit(1)
            options[key.strip()] = value.strip()
        return options

    @staticmethod
    def _process_format(parsed_args: argparse.Namespace, log_level: int) -> FormatArgs:
        project_root = ArgumentParser._resolve_project_root(parsed_args.path, detect=True)
        config_path = (
            Path(parsed_args.config).expanduser().resolve()
            if parsed_args.config
            else default_config_path(project_root)
        )

        jobs = parsed_args.jobs
        if jobs is not None and jobs <= 0:
            logger.error("Jobs must be a positive integer; received %s", jobs)
            sys.exit(1)

        return FormatArgs(
            command="format",
            project_root=project_root,
            config_path=config_path,
            line_ending=parsed_args.line_ending,
            encoding=parsed_args.encoding,
            engine=parsed_args.engine,
            includes=tuple(parsed_args.include),
            excludes=tuple(parsed_args.exclude),
            jobs=jobs,
            skip=parsed_args.skip,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
            log_level=log_level,
            options=ArgumentParser._parse_options(parsed_args.option),
        )

    @staticmethod
    def _process_init(parsed_args: argparse.Namespace) -> InitArgs:
        project_root = ArgumentParser._resolve_project_root(parsed_args.path, detect=False)
        return InitArgs(
            command="init",
            project_root=project_root,
            config_path=default_config_path(project_root),
            force=parsed_args.force,
        )
