"""Library aggregation helpers for the stats sidebar."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.media import MediaItem, MediaStatus, MediaType
from app.schema.media import LibraryStats
from app.services.media_fields import parse_media_type


async def get_library_stats(
    session: AsyncSession,
    owner_id: str,
    *,
    media_type: str | None = None,
    now: datetime | None = None,
) -> LibraryStats:
    """Return counts by type and status plus favorites and this year's consumption."""
    now = now or datetime.now(timezone.utc)
    filters = [MediaItem.owner_id == owner_id]
    parsed_type = parse_media_type(media_type)
    if parsed_type:
        filters.append(MediaItem.media_type == parsed_type)

    type_rows = await session.execute(
        select(MediaItem.media_type, func.count()).where(*filters).group_by(MediaItem.media_type)
    )
    by_media_type = {MediaType(media).value: count for media, count in type_rows.all()}

    status_rows = await session.execute(
        select(MediaItem.status, func.count())
        .where(*filters, MediaItem.status.is_not(None))
        .group_by(MediaItem.status)
    )
    by_status = {MediaStatus(status).value: count for status, count in status_rows.all()}

    favorites = await session.scalar(
        select(func.count()).select_from(MediaItem).where(*filters, MediaItem.favorite.is_(True))
    )
    year_start = datetime(now.year, 1, 1, tzinfo=timezone.utc)
    consumed_this_year = await session.scalar(
        select(func.count())
        .select_from(MediaItem)
        .where(
            *filters,
            MediaItem.date_consumed >= year_start,
            MediaItem.date_consumed < year_start.replace(year=now.year + 1),
        )
    )

    return LibraryStats(
        total=sum(by_media_type.values()),
        favorites=favorites or 0,
        consumed_this_year=consumed_this_year or 0,
        by_media_type=by_media_type,
        by_status=by_status,
    )
