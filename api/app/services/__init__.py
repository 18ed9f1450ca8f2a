from . import (
    library_service,
    media_fields,
    media_item_service,
    media_query,
    user_service,
)

__all__ = [
    "library_service",
    "media_fields",
    "media_item_service",
    "media_query",
    "user_service",
]
"""Service-layer helpers for API operations."""
