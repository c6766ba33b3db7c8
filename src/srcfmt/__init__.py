"""srcfmt: incremental source reformatter with a persisted content-hash cache."""

__version__ = "0.1.0"
