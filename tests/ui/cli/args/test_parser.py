"""Tests for command line argument parser."""

import logging
from argparse import Namespace
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from srcfmt.ui.cli.args import ArgumentParser, FormatArgs, InitArgs

MODULE = "srcfmt.ui.cli.args.parser"


@pytest.fixture(autouse=True)
def quiet_logger(mocker: MockerFixture):
    """Keep argument processing from reconfiguring real handlers."""

    return mocker.patch(f"{MODULE}.setup_logger")


def test_create_parser() -> None:
    """Argument parser should expose expected subcommands and options."""

    parser = ArgumentParser.create_parser()

    format_args: Namespace = parser.parse_args(["format", "project"])
    assert format_args.command == "format"
    assert format_args.path == "project"

    init_args: Namespace = parser.parse_args(["init", "--force"])
    assert init_args.command == "init"
    assert init_args.force is True

    all_flags = parser.parse_args(
        [
            "format",
            "--line-ending",
            "CRLF",
            "--encoding",
            "utf-8",
            "--engine",
            "python",
            "--include",
            "**/*.py",
            "--include",
            "**/*.pyi",
            "--exclude",
            "**/gen/**",
            "--jobs",
            "4",
            "--skip",
            "--verbose",
        ]
    )
    assert all_flags.include == ["**/*.py", "**/*.pyi"]
    assert all_flags.exclude == ["**/gen/**"]
    assert all_flags.jobs == 4
    assert all_flags.skip and all_flags.verbose


def test_verbose_and_quiet_are_exclusive() -> None:
    with pytest.raises(SystemExit):
        _ = ArgumentParser.create_parser().parse_args(["format", "--verbose", "--quiet"])


def test_process_format_args(tmp_path: Path, quiet_logger) -> None:
    args = ArgumentParser.process_args(
        [
            "format",
            str(tmp_path),
            "--line-ending",
            "lf",
            "--include",
            "**/*.py",
            "--option",
            "tabulation.char = space",
            "--jobs",
            "2",
        ]
    )

    assert isinstance(args, FormatArgs)
    assert args.project_root == tmp_path.resolve()
    assert args.config_path == tmp_path.resolve() / "srcfmt.toml"
    assert args.line_ending == "lf"
    assert args.includes == ("**/*.py",)
    assert args.excludes == ()
    assert args.options == {"tabulation.char": "space"}
    assert args.jobs == 2
    assert args.log_level == logging.INFO
    quiet_logger.assert_called_once_with(console_level=logging.INFO)


@pytest.mark.parametrize(
    ("flag", "level"),
    [("--verbose", logging.DEBUG), ("--quiet", logging.ERROR)],
)
def test_verbosity_sets_console_level(tmp_path: Path, quiet_logger, flag: str, level: int) -> None:
    args = ArgumentParser.process_args(["format", str(tmp_path), flag])

    assert isinstance(args, FormatArgs)
    assert args.log_level == level
    quiet_logger.assert_called_once_with(console_level=level)


def test_explicit_config_path_is_kept(tmp_path: Path) -> None:
    custom = tmp_path / "conf" / "custom.toml"

    args = ArgumentParser.process_args(["format", str(tmp_path), "--config", str(custom)])

    assert isinstance(args, FormatArgs)
    assert args.config_path == custom.resolve()


def test_format_without_path_detects_project_root(tmp_path: Path, mocker: MockerFixture) -> None:
    detect = mocker.patch(f"{MODULE}.detect_project_root", return_value=tmp_path)

    args = ArgumentParser.process_args(["format"])

    detect.assert_called_once_with()
    assert args.project_root == tmp_path


def test_process_init_args(tmp_path: Path) -> None:
    args = ArgumentParser.process_args(["init", str(tmp_path), "--force"])

    assert isinstance(args, InitArgs)
    assert args.force is True
    assert args.config_path == tmp_path.resolve() / "srcfmt.toml"


@pytest.mark.parametrize(
    "extra",
    [
        ["--jobs", "0"],
        ["--option", "no-separator"],
        ["--option", "=value"],
    ],
)
def test_invalid_values_exit_with_status_one(tmp_path: Path, extra: list[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        _ = ArgumentParser.process_args(["format", str(tmp_path), *extra])

    assert exc_info.value.code == 1


def test_missing_project_directory_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        _ = ArgumentParser.process_args(["format", str(tmp_path / "missing")])

    assert exc_info.value.code == 1
