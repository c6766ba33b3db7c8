"""Application service for formatting source files.

This layer centralizes construction of engines, cache stores and the run
controller so the CLI only deals with configuration and presentation.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import final

from srcfmt.config.config import Config
from srcfmt.config.errors import ConfigurationError
from srcfmt.config.paths import default_build_dir
from srcfmt.features.formatting.adapters import PropertiesHashCacheStore, SqliteHashCacheStore
from srcfmt.features.formatting.engines import ENGINE_FACTORIES, create_engine
from srcfmt.features.formatting.usecases.ports import HashCacheStorePort
from srcfmt.features.formatting.usecases.processing_types import RunSummary
from srcfmt.features.formatting.usecases.run_controller import (
    EngineFactory,
    FormatRequest,
    FormatRunController,
    ProgressCallback,
)

CACHE_BACKENDS: dict[str, Callable[[Path], HashCacheStorePort]] = {
    "properties": PropertiesHashCacheStore,
    "sqlite": SqliteHashCacheStore,
}


def create_cache_store(build_dir: Path, backend: str) -> HashCacheStorePort:
    """Return the cache store registered as ``backend`` for ``build_dir``.

    Raises:
        ConfigurationError: If ``backend`` is unknown.
    """
    factory = CACHE_BACKENDS.get(backend.strip().lower())
    if factory is None:
        known = ", ".join(sorted(CACHE_BACKENDS))
        raise ConfigurationError(f"Unknown cache backend {backend!r} (expected one of {known})")
    return factory(build_dir)


@dataclass(frozen=True)
class FormatOverrides:
    """Command-line values that take precedence over ``srcfmt.toml``.

    ``None`` (or an empty tuple) keeps the configured value.
    """

    line_ending: str | None = None
    encoding: str | None = None
    engine: str | None = None
    includes: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()
    jobs: int | None = None
    skip: bool = False
    extra_options: Mapping[str, str] = field(default_factory=dict)


def build_request(
    config: Config,
    project_root: Path,
    overrides: FormatOverrides | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> FormatRequest:
    """Merge ``config`` and ``overrides`` into a ``FormatRequest``.

    Relative paths in the configuration are anchored at ``project_root``.
    """
    overrides = overrides or FormatOverrides()
    anchor = project_root.expanduser().resolve()

    base_dir = config.resolve_path(config.base_dir, anchor) or anchor
    build_dir = config.resolve_path(config.build_dir, anchor) or default_build_dir(
        base_dir, env=env
    )
    options_file = config.resolve_path(config.options_file, anchor)
    directories = tuple(
        resolved
        for resolved in (config.resolve_path(Path(entry), base_dir) for entry in config.directories)
        if resolved is not None
    )

    return FormatRequest(
        base_dir=base_dir,
        build_dir=build_dir,
        directories=directories,
        includes=overrides.includes or tuple(config.includes),
        excludes=overrides.excludes or tuple(config.excludes),
        encoding=overrides.encoding or config.encoding,
        line_ending=overrides.line_ending or config.line_ending,
        engine=overrides.engine or config.engine,
        compiler_source=config.compiler_source,
        compiler_compliance=config.compiler_compliance,
        compiler_target_platform=config.compiler_target_platform,
        options_file=options_file,
        override_config_compiler_version=config.override_config_compiler_version,
        skip=overrides.skip or config.skip,
        cache_backend=config.cache_backend,
        jobs=overrides.jobs if overrides.jobs is not None else config.jobs,
        extra_options=dict(overrides.extra_options),
    )


@final
class FormatSourcesService:
    """Application service that wires and runs one formatting pass."""

    def __init__(
        self,
        *,
        engine_factory: EngineFactory | None = None,
        cache_store_factory: Callable[[Path, str], HashCacheStorePort] | None = None,
        controller_factory: Callable[..., FormatRunController] | None = None,
    ) -> None:
        """Create a service with overridable infrastructure factories.

        Tests can inject light-weight doubles while production code relies on
        the registered engines and cache backends.
        """

        # Registered names are only known for the built-in factories.
        self._engine_names: tuple[str, ...] | None = (
            tuple(ENGINE_FACTORIES) if engine_factory is None else None
        )
        self._cache_backends: tuple[str, ...] | None = (
            tuple(CACHE_BACKENDS) if cache_store_factory is None else None
        )
        self._engine_factory: EngineFactory = engine_factory or create_engine
        self._cache_store_factory: Callable[[Path, str], HashCacheStorePort] = (
            cache_store_factory or create_cache_store
        )
        self._controller_factory: Callable[..., FormatRunController] = (
            controller_factory or FormatRunController
        )

    def build_controller(self) -> FormatRunController:
        return self._controller_factory(
            engine_factory=self._engine_factory,
            cache_store_factory=self._cache_store_factory,
            engine_names=self._engine_names,
            cache_backends=self._cache_backends,
        )

    def run(
        self,
        request: FormatRequest,
        progress_callback: ProgressCallback | None = None,
    ) -> RunSummary | None:
        """Run one formatting pass for ``request``.

        Raises:
            ConfigurationError: When the request cannot be executed.
        """
        controller = self.build_controller()
        return controller.run(request, progress_callback=progress_callback)


__all__ = [
    "CACHE_BACKENDS",
    "FormatOverrides",
    "FormatSourcesService",
    "build_request",
    "create_cache_store",
]
