"""Tests for the format command executor."""

import logging
from pathlib import Path

from pytest_mock import MockerFixture

from srcfmt.features.formatting.usecases.processing_types import RunSummary
from srcfmt.ui.cli.args.options import FormatArgs
from srcfmt.ui.cli.commands import FormatCommand


def _args(root: Path, **overrides: object) -> FormatArgs:
    values: dict[str, object] = {
        "command": "format",
        "project_root": root,
        "config_path": root / "srcfmt.toml",
        "line_ending": None,
        "encoding": None,
        "engine": None,
        "includes": (),
        "excludes": (),
        "jobs": None,
        "skip": False,
        "verbose": False,
        "quiet": False,
        "log_level": logging.INFO,
    }
    values.update(overrides)
    return FormatArgs(**values)  # type: ignore[arg-type]


def test_execute_merges_config_and_flags(tmp_path: Path, mocker: MockerFixture) -> None:
    _ = (tmp_path / "srcfmt.toml").write_text(
        'engine = "python"\njobs = 3\n', encoding="utf-8"
    )
    app = mocker.Mock()
    summary = RunSummary(formatted=1)
    command = FormatCommand(_args(tmp_path, encoding="latin-1", quiet=True), app)
    run = mocker.patch.object(command.progress_display, "run_with_service", return_value=summary)
    show = mocker.patch.object(command.result_display, "show_results")

    assert command.execute() is summary

    request = run.call_args.args[1]
    assert request.engine == "python"
    assert request.jobs == 3
    assert request.encoding == "latin-1"
    assert run.call_args.kwargs == {"enabled": False}
    show.assert_called_once_with(summary, quiet=True)


def test_skipped_run_reports_skip(tmp_path: Path, mocker: MockerFixture) -> None:
    command = FormatCommand(_args(tmp_path, skip=True), mocker.Mock())
    _ = mocker.patch.object(command.progress_display, "run_with_service", return_value=None)
    skipped = mocker.patch.object(command.result_display, "show_skipped")

    assert command.execute() is None

    skipped.assert_called_once_with(quiet=False)


def test_configured_log_file_reconfigures_logger(tmp_path: Path, mocker: MockerFixture) -> None:
    _ = (tmp_path / "srcfmt.toml").write_text('log_file = "logs/srcfmt.log"\n', encoding="utf-8")
    setup = mocker.patch("srcfmt.ui.cli.commands.format.setup_logger")
    command = FormatCommand(_args(tmp_path, log_level=logging.DEBUG), mocker.Mock())
    _ = mocker.patch.object(command.progress_display, "run_with_service", return_value=None)
    _ = mocker.patch.object(command.result_display, "show_skipped")

    _ = command.execute()

    setup.assert_called_once_with(
        log_file=(tmp_path / "logs" / "srcfmt.log").resolve(),
        console_level=logging.DEBUG,
    )
