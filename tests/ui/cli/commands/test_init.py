"""Tests for the init command."""

import tomllib
from pathlib import Path

from rich.console import Console

from srcfmt.ui.cli.args.options import InitArgs
from srcfmt.ui.cli.commands import InitCommand


def _args(root: Path, force: bool = False) -> InitArgs:
    return InitArgs(
        command="init",
        project_root=root,
        config_path=root / "srcfmt.toml",
        force=force,
    )


def test_init_writes_parseable_defaults(tmp_path: Path) -> None:
    assert InitCommand(_args(tmp_path)).execute() is True

    with open(tmp_path / "srcfmt.toml", "rb") as f:
        document = tomllib.load(f)
    assert document["line_ending"] == "AUTO"
    assert document["engine"] == "whitespace"


def test_existing_file_needs_force(tmp_path: Path) -> None:
    target = tmp_path / "srcfmt.toml"
    _ = target.write_text("# mine\n", encoding="utf-8")
    console = Console(record=True, width=200)

    assert InitCommand(_args(tmp_path), console=console).execute() is False
    assert target.read_text(encoding="utf-8") == "# mine\n"
    assert "--force" in console.export_text()

    assert InitCommand(_args(tmp_path, force=True), console=console).execute() is True
    assert target.read_text(encoding="utf-8") != "# mine\n"


def test_existing_file_message_prints_bracketed_paths_verbatim(tmp_path: Path) -> None:
    root = tmp_path / "[red]"
    root.mkdir()
    _ = (root / "srcfmt.toml").write_text("# mine\n", encoding="utf-8")
    console = Console(record=True, width=300)

    assert InitCommand(_args(root), console=console).execute() is False
    assert f"{root / 'srcfmt.toml'} already exists" in console.export_text()
