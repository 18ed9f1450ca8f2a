"""Seed script for demo data in local/dev environments."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import configure_logging
from app.core.security import create_access_token
from app.db.session import async_session
from app.models.media import MediaItem, MediaType
from app.schema.auth import TokenIdentity
from app.services import media_item_service, user_service

DEMO_UID = "demo-user"
DEMO_EMAIL = "demo@oriana.local"
DEMO_DISPLAY_NAME = "Demo User"

logger = logging.getLogger("app.scripts.seed")


@dataclass(frozen=True)
class SeedMediaDefinition:
    """Structured definition for a seeded media item."""
    media_type: MediaType
    title: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    def payload(self) -> dict[str, Any]:
        return {"mediaType": self.media_type.value, "title": self.title, **self.fields}


SEED_MEDIA: tuple[SeedMediaDefinition, ...] = (
    SeedMediaDefinition(
        MediaType.BOOK,
        "Dune",
        {
            "authors": ["Frank Herbert"],
            "pageCount": 412,
            "publisher": "Chilton Books",
            "rating": 5,
            "status": "completed",
            "dateConsumed": "2024-02-11",
            "tags": ["sci-fi", "classic"],
        },
    ),
    SeedMediaDefinition(
        MediaType.MOVIE,
        "Arrival",
        {"director": "Denis Villeneuve", "runtimeMinutes": 116, "rating": 4.5, "favorite": True},
    ),
    SeedMediaDefinition(
        MediaType.SHOW,
        "Severance",
        {"seasonCount": 2, "episodeCount": 19, "status": "in_progress", "tags": ["thriller"]},
    ),
    SeedMediaDefinition(
        MediaType.ANIME,
        "Mushishi",
        {"director": "Hiroshi Nagahama", "episodeCount": 26, "status": "planned"},
    ),
    SeedMediaDefinition(
        MediaType.GAME,
        "Outer Wilds",
        {"platforms": ["PC", "PS5"], "developers": ["Mobius Digital"], "hoursPlayed": 22.5},
    ),
    SeedMediaDefinition(
        MediaType.MUSIC_ALBUM,
        "In Rainbows",
        {"artist": "Radiohead", "musicGenre": ["Art rock"], "trackCount": 10, "recordLabel": "XL"},
    ),
)


async def seed_demo_library(session: AsyncSession, uid: str = DEMO_UID) -> int:
    """Create the demo profile and log the demo items once; returns items created."""
    await user_service.get_or_create_user(
        session, TokenIdentity(uid=uid, email=DEMO_EMAIL, display_name=DEMO_DISPLAY_NAME)
    )
    existing = await session.scalar(select(func.count()).select_from(MediaItem).where(MediaItem.owner_id == uid))
    if existing:
        logger.info("Demo library already has %d items; skipping", existing)
        return 0
    for definition in SEED_MEDIA:
        await media_item_service.create_item(session, uid, definition.payload())
    return len(SEED_MEDIA)


async def main() -> None:
    configure_logging()
    async with async_session() as session:
        created = await seed_demo_library(session)
    logger.info("Seeded %d media items for %s", created, DEMO_UID)
    print(f"Bearer token for {DEMO_UID}: {create_access_token(DEMO_UID, email=DEMO_EMAIL, name=DEMO_DISPLAY_NAME)}")


if __name__ == "__main__":
    asyncio.run(main())
