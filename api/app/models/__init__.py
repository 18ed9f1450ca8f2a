from app.models.media import (
    BookItem,
    GameItem,
    MediaItem,
    MediaStatus,
    MediaType,
    MusicAlbumItem,
    ScreenItem,
)
from app.models.user import User

__all__ = [
    "BookItem",
    "GameItem",
    "MediaItem",
    "MediaStatus",
    "MediaType",
    "MusicAlbumItem",
    "ScreenItem",
    "User",
]
"""SQLAlchemy ORM models for the Oriana API."""
