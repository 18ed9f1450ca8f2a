"""Allow-listing of client-supplied media item fields.

Invariants:
- Only wire names in `ALLOWED_FIELDS` survive; `owner`, `id` and timestamps never do.
- An unknown `mediaType` is dropped, never translated or defaulted.
- List fields come out as lists; comma-delimited strings are split.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from app.core.errors import InvalidFieldValue
from app.models.media import MediaStatus, MediaType

logger = logging.getLogger("app.services.media_fields")

COMMON_FIELDS = (
    "title",
    "cover",
    "mediaType",
    "rating",
    "favorite",
    "notes",
    "dateConsumed",
    "status",
    "tags",
    "externalIds",
    "releaseDate",
)
BOOK_FIELDS = ("authors", "pageCount", "publisher", "isbn")
GAME_FIELDS = ("platforms", "developers", "gamePublisher", "hoursPlayed")
SCREEN_FIELDS = ("director", "runtimeMinutes", "seasonCount", "episodeCount")
MUSIC_ALBUM_FIELDS = ("artist", "musicGenre", "trackCount", "recordLabel")

ALLOWED_FIELDS: tuple[str, ...] = COMMON_FIELDS + BOOK_FIELDS + GAME_FIELDS + SCREEN_FIELDS + MUSIC_ALBUM_FIELDS
LIST_FIELDS = frozenset({"tags", "authors", "platforms", "developers", "musicGenre"})

MEDIA_TYPE_VALUES = frozenset(media_type.value for media_type in MediaType)
STATUS_VALUES = frozenset(status.value for status in MediaStatus)


def parse_media_type(value: Any) -> MediaType | None:
    """Return the matching media type, or None for anything outside the closed set."""
    if isinstance(value, str) and value in MEDIA_TYPE_VALUES:
        return MediaType(value)
    return None


def parse_status(value: Any) -> MediaStatus | None:
    if isinstance(value, str) and value in STATUS_VALUES:
        return MediaStatus(value)
    return None


def split_delimited(value: str) -> list[str]:
    """Split a comma-delimited string into trimmed, non-empty parts."""
    return [part.strip() for part in value.split(",") if part.strip()]


def _normalize_list(key: str, value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        return split_delimited(value)
    raise InvalidFieldValue(errors={key: "Must be a list of strings or a comma-separated string"})


def extract_allowed_fields(body: Any) -> dict[str, Any]:
    """Return a new dict holding only allow-listed media item fields from `body`."""
    if not isinstance(body, Mapping):
        raise InvalidFieldValue("Request body must be a JSON object")

    data: dict[str, Any] = {}
    for key in ALLOWED_FIELDS:
        if key not in body:
            continue
        value = body[key]
        if key in LIST_FIELDS:
            value = _normalize_list(key, value)
        elif key == "mediaType":
            if parse_media_type(value) is None:
                logger.warning("Invalid mediaType received: %r. It will be ignored.", value)
                continue
        data[key] = value
    return data
