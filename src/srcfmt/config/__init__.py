"""Configuration loading, path policy, and options documents."""

from srcfmt.config.config import (
    DEFAULT_COMPILER_VERSION,
    DEFAULT_INCLUDES,
    DEFAULT_SOURCE_DIRECTORIES,
    Config,
)
from srcfmt.config.errors import ConfigurationError, OptionsDocumentError
from srcfmt.config.options_reader import read_options_document

__all__ = [
    "Config",
    "ConfigurationError",
    "DEFAULT_COMPILER_VERSION",
    "DEFAULT_INCLUDES",
    "DEFAULT_SOURCE_DIRECTORIES",
    "OptionsDocumentError",
    "read_options_document",
]
