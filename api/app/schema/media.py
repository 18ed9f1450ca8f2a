"""Media item payloads.

Each media type has its own create, update and read model. They share the
envelope fields and add only that category's fields, so a book can never carry
`hoursPlayed` and a movie can never carry `seasonCount`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Union
from uuid import UUID

from pydantic import ConfigDict, Field, StrictBool, field_validator

from app.models.media import MediaItem, MediaStatus, MediaType
from app.schema.base import CamelModel

ENVELOPE_FIELDS = (
    "title",
    "cover",
    "rating",
    "favorite",
    "notes",
    "date_consumed",
    "status",
    "tags",
    "external_ids",
    "release_date",
)


def as_utc(value: datetime | None) -> datetime | None:
    """Normalize to an aware UTC datetime; naive values are taken as UTC."""
    if value is None:
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# ---------- Category payloads ----------


class BookFields(CamelModel):
    authors: list[str] = Field(default_factory=list)
    page_count: int | None = Field(default=None, ge=0)
    publisher: str | None = Field(default=None, max_length=255)
    isbn: str | None = Field(default=None, max_length=32)


class GameFields(CamelModel):
    platforms: list[str] = Field(default_factory=list)
    developers: list[str] = Field(default_factory=list)
    game_publisher: str | None = Field(default=None, max_length=255)
    hours_played: float | None = Field(default=None, ge=0, allow_inf_nan=False)


class MovieFields(CamelModel):
    director: str | None = Field(default=None, max_length=255)
    runtime_minutes: int | None = Field(default=None, ge=0)


class SeriesFields(MovieFields):
    season_count: int | None = Field(default=None, ge=0)
    episode_count: int | None = Field(default=None, ge=0)


class MusicAlbumFields(CamelModel):
    artist: str | None = Field(default=None, max_length=255)
    music_genre: list[str] = Field(default_factory=list)
    track_count: int | None = Field(default=None, ge=0)
    record_label: str | None = Field(default=None, max_length=255)


CATEGORY_FIELDS: dict[MediaType, type[CamelModel]] = {
    MediaType.BOOK: BookFields,
    MediaType.GAME: GameFields,
    MediaType.MOVIE: MovieFields,
    MediaType.SHOW: SeriesFields,
    MediaType.ANIME: SeriesFields,
    MediaType.MUSIC_ALBUM: MusicAlbumFields,
}


def category_field_names(media_type: MediaType | str) -> tuple[str, ...]:
    """Attribute names stored on the extension row for a media type."""
    return tuple(CATEGORY_FIELDS[MediaType(media_type)].model_fields)


# ---------- Create ----------


class MediaItemCreateBase(CamelModel):
    """Envelope fields accepted when logging a new item."""
    model_config = ConfigDict(extra="forbid")

    media_type: MediaType
    title: str = Field(min_length=1, max_length=500)
    cover: str | None = Field(default=None, max_length=1024)
    rating: float | None = Field(default=None, ge=0, le=5, allow_inf_nan=False)
    favorite: StrictBool = False
    notes: str | None = None
    date_consumed: datetime | None = None
    status: MediaStatus | None = None
    tags: list[str] = Field(default_factory=list)
    external_ids: dict[str, str] | None = None
    release_date: datetime | None = None

    normalize_dates = field_validator("date_consumed", "release_date")(as_utc)


class BookCreate(MediaItemCreateBase, BookFields):
    pass


class GameCreate(MediaItemCreateBase, GameFields):
    pass


class MovieCreate(MediaItemCreateBase, MovieFields):
    pass


class SeriesCreate(MediaItemCreateBase, SeriesFields):
    pass


class MusicAlbumCreate(MediaItemCreateBase, MusicAlbumFields):
    pass


CREATE_MODELS: dict[MediaType, type[MediaItemCreateBase]] = {
    MediaType.BOOK: BookCreate,
    MediaType.GAME: GameCreate,
    MediaType.MOVIE: MovieCreate,
    MediaType.SHOW: SeriesCreate,
    MediaType.ANIME: SeriesCreate,
    MediaType.MUSIC_ALBUM: MusicAlbumCreate,
}


# ---------- Update ----------


class MediaItemUpdateBase(CamelModel):
    """Envelope fields accepted on update; `mediaType` is never part of it."""
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=500)
    cover: str | None = Field(default=None, max_length=1024)
    rating: float | None = Field(default=None, ge=0, le=5, allow_inf_nan=False)
    favorite: StrictBool | None = None
    notes: str | None = None
    date_consumed: datetime | None = None
    status: MediaStatus | None = None
    tags: list[str] = Field(default_factory=list)
    external_ids: dict[str, str] | None = None
    release_date: datetime | None = None

    normalize_dates = field_validator("date_consumed", "release_date")(as_utc)

    @field_validator("title", "favorite")
    @classmethod
    def _reject_null(cls, value):
        if value is None:
            raise ValueError("Field may not be null")
        return value


class BookUpdate(MediaItemUpdateBase, BookFields):
    pass


class GameUpdate(MediaItemUpdateBase, GameFields):
    pass


class MovieUpdate(MediaItemUpdateBase, MovieFields):
    pass


class SeriesUpdate(MediaItemUpdateBase, SeriesFields):
    pass


class MusicAlbumUpdate(MediaItemUpdateBase, MusicAlbumFields):
    pass


UPDATE_MODELS: dict[MediaType, type[MediaItemUpdateBase]] = {
    MediaType.BOOK: BookUpdate,
    MediaType.GAME: GameUpdate,
    MediaType.MOVIE: MovieUpdate,
    MediaType.SHOW: SeriesUpdate,
    MediaType.ANIME: SeriesUpdate,
    MediaType.MUSIC_ALBUM: MusicAlbumUpdate,
}


# ---------- Read ----------


class MediaItemReadBase(CamelModel):
    """Stored envelope as returned to the owner."""
    id: UUID
    owner: str
    title: str
    cover: str | None = None
    rating: float | None = None
    favorite: bool = False
    notes: str | None = None
    date_consumed: datetime | None = None
    status: MediaStatus | None = None
    tags: list[str] = Field(default_factory=list)
    external_ids: dict[str, str] | None = None
    release_date: datetime | None = None
    date_logged: datetime
    created_at: datetime
    updated_at: datetime

    normalize_timestamps = field_validator(
        "date_consumed", "release_date", "date_logged", "created_at", "updated_at"
    )(as_utc)


class BookRead(MediaItemReadBase, BookFields):
    media_type: Literal["book"]


class GameRead(MediaItemReadBase, GameFields):
    media_type: Literal["game"]


class MovieRead(MediaItemReadBase, MovieFields):
    media_type: Literal["movie"]


class SeriesRead(MediaItemReadBase, SeriesFields):
    media_type: Literal["show", "anime"]


class MusicAlbumRead(MediaItemReadBase, MusicAlbumFields):
    media_type: Literal["music_album"]


MediaItemRead = Union[BookRead, GameRead, MovieRead, SeriesRead, MusicAlbumRead]

READ_MODELS: dict[MediaType, type[MediaItemReadBase]] = {
    MediaType.BOOK: BookRead,
    MediaType.GAME: GameRead,
    MediaType.MOVIE: MovieRead,
    MediaType.SHOW: SeriesRead,
    MediaType.ANIME: SeriesRead,
    MediaType.MUSIC_ALBUM: MusicAlbumRead,
}


def to_read_model(item: MediaItem) -> MediaItemReadBase:
    """Flatten an envelope row and its extension row into the read variant."""
    media_type = MediaType(item.media_type)
    data: dict[str, object] = {name: getattr(item, name) for name in ENVELOPE_FIELDS}
    data.update(
        id=item.id,
        owner=item.owner_id,
        media_type=media_type.value,
        date_logged=item.created_at,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )
    details = item.details
    if details is not None:
        for name in category_field_names(media_type):
            data[name] = getattr(details, name)
    if data.get("tags") is None:
        data["tags"] = []
    return READ_MODELS[media_type].model_validate(data)


class FavoriteUpdate(CamelModel):
    """Documented body of the favorite toggle endpoint."""
    favorite: StrictBool


class DeleteResponse(CamelModel):
    message: str


class LibraryStats(CamelModel):
    """Counts backing the library sidebar."""
    total: int = 0
    favorites: int = 0
    consumed_this_year: int = 0
    by_media_type: dict[str, int] = Field(default_factory=dict)
    by_status: dict[str, int] = Field(default_factory=dict)
