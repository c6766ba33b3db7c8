"""Application services package."""

from srcfmt.application.services.format_service import (
    FormatOverrides,
    FormatSourcesService,
    build_request,
    create_cache_store,
)

__all__ = ["FormatOverrides", "FormatSourcesService", "build_request", "create_cache_store"]
