"""
Summary: Registry of formatting engines selectable by name.
Why: The run controller builds exactly one engine per run from a resolved option map.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from srcfmt.config.errors import ConfigurationError

from .base import (
    COMPILER_OPTION_KEYS,
    DOCUMENT_SCOPE,
    EngineOptionError,
    FormatScope,
    FormattingEngine,
    FormattingEngineError,
)
from .passthrough import PassthroughEngine
from .python import PythonSourceEngine
from .whitespace import WhitespaceEngine

EngineFactory = Callable[[Mapping[str, str]], FormattingEngine]

ENGINE_FACTORIES: dict[str, EngineFactory] = {
    WhitespaceEngine.name: WhitespaceEngine,
    PythonSourceEngine.name: PythonSourceEngine,
    PassthroughEngine.name: PassthroughEngine,
}


def create_engine(name: str, options: Mapping[str, str]) -> FormattingEngine:
    """Instantiate the engine registered as ``name``.

    Raises:
        ConfigurationError: If ``name`` is unknown or an option is invalid.
    """
    factory = ENGINE_FACTORIES.get(name.strip().lower())
    if factory is None:
        known = ", ".join(sorted(ENGINE_FACTORIES))
        raise ConfigurationError(f"Unknown formatting engine {name!r} (expected one of {known})")
    return factory(options)


__all__ = [
    "COMPILER_OPTION_KEYS",
    "DOCUMENT_SCOPE",
    "ENGINE_FACTORIES",
    "EngineOptionError",
    "FormatScope",
    "FormattingEngine",
    "FormattingEngineError",
    "PassthroughEngine",
    "PythonSourceEngine",
    "WhitespaceEngine",
    "create_engine",
]
