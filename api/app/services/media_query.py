"""Sort expression parsing for media item listings."""

from __future__ import annotations

import logging
from typing import NamedTuple

from sqlalchemy.sql.elements import ColumnElement

from app.models.media import MediaItem

logger = logging.getLogger("app.services.media_query")


class SortKey(NamedTuple):
    field: str
    descending: bool


DEFAULT_SORT: tuple[SortKey, ...] = (
    SortKey("dateConsumed", True),
    SortKey("createdAt", True),
)

SORT_COLUMNS = {
    "title": MediaItem.title,
    "mediaType": MediaItem.media_type,
    "rating": MediaItem.rating,
    "favorite": MediaItem.favorite,
    "status": MediaItem.status,
    "dateConsumed": MediaItem.date_consumed,
    "releaseDate": MediaItem.release_date,
    "createdAt": MediaItem.created_at,
    "dateLogged": MediaItem.created_at,
    "updatedAt": MediaItem.updated_at,
}


def parse_sort_expression(expression: str) -> list[SortKey]:
    """Parse `"-rating title"` style expressions and merge in the default keys.

    Caller keys keep their order and take precedence; default keys the caller
    did not mention are appended as tie-breakers.
    """
    keys: list[SortKey] = []
    seen: set[str] = set()
    for token in expression.split():
        descending = token.startswith("-")
        field = token.lstrip("-")
        if field not in SORT_COLUMNS:
            logger.debug("Ignoring unknown sort field %r", field)
            continue
        column_key = SORT_COLUMNS[field].key
        if column_key in seen:
            continue
        seen.add(column_key)
        keys.append(SortKey(field, descending))
    for default in DEFAULT_SORT:
        if SORT_COLUMNS[default.field].key not in seen:
            seen.add(SORT_COLUMNS[default.field].key)
            keys.append(default)
    return keys


def build_order_by(keys: tuple[SortKey, ...] | list[SortKey]) -> list[ColumnElement]:
    """Translate sort keys into ORDER BY clauses; nulls rank lowest, id breaks ties."""
    clauses: list[ColumnElement] = []
    for key in keys:
        column = SORT_COLUMNS[key.field]
        clauses.append(column.desc().nulls_last() if key.descending else column.asc().nulls_first())
    clauses.append(MediaItem.id.asc())
    return clauses
