"""Configuration management for srcfmt."""

from __future__ import annotations

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

from srcfmt.config.errors import ConfigurationError
from srcfmt.config.file_ops import ensure_file_with_template
from srcfmt.platform.logging import logger


DEFAULT_COMPILER_VERSION = "3.8"
DEFAULT_INCLUDES: tuple[str, ...] = ("**/*",)
DEFAULT_SOURCE_DIRECTORIES: tuple[str, ...] = ("src", "tests")


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Project configuration read from ``srcfmt.toml``."""

    # Base directory used to derive cache keys (defaults to the project root)
    base_dir: Path | None = _path_field()

    # Build output directory holding the hash cache
    build_dir: Path | None = _path_field()

    # Optional formatter options document (TOML)
    options_file: Path | None = _path_field()

    # Log file path
    log_file: Path | None = _path_field()

    # Source selection
    directories: list[str] = field(default_factory=list)
    includes: list[str] = field(default_factory=list)
    excludes: list[str] = field(default_factory=list)

    # Text handling
    encoding: str | None = None
    line_ending: str = "AUTO"

    # Engine settings
    engine: str = "whitespace"
    compiler_source: str = DEFAULT_COMPILER_VERSION
    compiler_compliance: str = DEFAULT_COMPILER_VERSION
    compiler_target_platform: str = DEFAULT_COMPILER_VERSION
    override_config_compiler_version: bool = False

    # Run behaviour
    skip: bool = False
    cache_backend: str = "properties"
    jobs: int = 1

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata.

        Only fields created through ``_path_field`` are converted; empty
        strings become ``None``.
        """
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value) if value.strip() else None)

    def resolve_path(self, value: Path | None, anchor: Path) -> Path | None:
        """Return ``value`` made absolute against ``anchor`` when relative."""

        if value is None:
            return None
        candidate = value.expanduser()
        if not candidate.is_absolute():
            candidate = anchor / candidate
        return candidate.resolve()

    def save(self, target: Path, *, overwrite: bool = False) -> bool:
        """Save configuration to ``target`` as commented TOML.

        Returns:
            bool: ``False`` when the file already exists and ``overwrite`` is off.
        """
        config_dict = asdict(self)
        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        rendered = self._render_toml(config_dict)
        try:
            written = ensure_file_with_template(
                target, template_provider=lambda: rendered, overwrite=overwrite
            )
        except OSError as e:
            logger.error("Failed to save configuration: %s", e)
            raise
        if written:
            logger.info("Configuration saved to %s", target)
        return written

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# srcfmt configuration file")
        lines.append("")

        lines.append("# Paths; relative values are anchored at the project root")
        for key, example in (
            ("base_dir", "."),
            ("build_dir", "build"),
            ("log_file", "build/srcfmt.log"),
        ):
            if config[key]:
                lines.append(f"{key} = {self._format_toml_value(config[key])}")
            else:
                lines.append(f'# {key} = "{example}"')
        lines.append("")

        lines.append("# Source directories to format, relative to the base directory")
        lines.append(f"# Defaults to {list(DEFAULT_SOURCE_DIRECTORIES)} when empty")
        lines.append(f"directories = {self._format_toml_value(config['directories'])}")
        lines.append("")

        lines.append("# Glob patterns selecting files inside the source directories")
        lines.append(f"# Defaults to {list(DEFAULT_INCLUDES)} when empty")
        lines.append(f"includes = {self._format_toml_value(config['includes'])}")
        lines.append(f"excludes = {self._format_toml_value(config['excludes'])}")
        lines.append("")

        lines.append("# File encoding (platform encoding when unset)")
        lines.append('# Example: encoding = "utf-8"')
        if config["encoding"]:
            lines.append(f"encoding = {self._format_toml_value(config['encoding'])}")
        lines.append("")

        lines.append("# Line endings after formatting: AUTO, KEEP, LF, CRLF or CR")
        lines.append(f"line_ending = {self._format_toml_value(config['line_ending'])}")
        lines.append("")

        lines.append("# Formatting engine: whitespace, python or passthrough")
        lines.append(f"engine = {self._format_toml_value(config['engine'])}")
        lines.append(f"compiler_source = {self._format_toml_value(config['compiler_source'])}")
        lines.append(
            f"compiler_compliance = {self._format_toml_value(config['compiler_compliance'])}"
        )
        lines.append(
            "compiler_target_platform = "
            f"{self._format_toml_value(config['compiler_target_platform'])}"
        )
        lines.append("")

        lines.append("# Optional TOML document with engine options ([formatter] table)")
        lines.append('# Example: options_file = "formatter.toml"')
        if config["options_file"]:
            lines.append(f"options_file = {self._format_toml_value(config['options_file'])}")
        lines.append(
            "override_config_compiler_version = "
            f"{self._format_toml_value(config['override_config_compiler_version'])}"
        )
        lines.append("")

        lines.append("# Hash cache backend: properties or sqlite")
        lines.append(f"cache_backend = {self._format_toml_value(config['cache_backend'])}")
        lines.append("# Worker threads used to format files")
        lines.append(f"jobs = {self._format_toml_value(config['jobs'])}")
        lines.append("# Skip formatting entirely")
        lines.append(f"skip = {self._format_toml_value(config['skip'])}")
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization."""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (list, tuple)):
            return "[" + ", ".join(self._format_toml_value(item) for item in value) + "]"
        if isinstance(value, (str, Path)):
            escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        return str(value)

    @classmethod
    def load(cls, config_file: Path | None) -> "Config":
        """Load configuration from ``config_file``.

        A missing file yields the defaults.

        Raises:
            ConfigurationError: If the file cannot be read or parsed, or holds
                unknown keys.
        """
        if config_file is None or not config_file.exists():
            return cls()

        try:
            with open(config_file, "rb") as f:
                config_dict = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration {config_file}: {e}") from e

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config_dict) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys in {config_file}: {', '.join(unknown)}"
            )

        try:
            instance = cls(**config_dict)
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration in {config_file}: {e}") from e

        logger.debug("Configuration loaded from %s", config_file)
        return instance


__all__ = [
    "Config",
    "DEFAULT_COMPILER_VERSION",
    "DEFAULT_INCLUDES",
    "DEFAULT_SOURCE_DIRECTORIES",
]
