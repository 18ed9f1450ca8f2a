"""Async engine and session factory, built once per process."""

from __future__ import annotations

import logging
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings
from app.utils.redaction import redact_secrets

logger = logging.getLogger("app.db.session")


def build_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    """Create the async engine for the configured store."""
    logger.info("Configuring database engine for %s", redact_secrets(database_url))
    return create_async_engine(database_url, echo=echo, future=True, pool_pre_ping=True)


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, expire_on_commit=False, class_=AsyncSession)


engine = build_engine(settings.database_url, echo=settings.database_echo)
async_session = build_sessionmaker(engine)


async def get_session() -> AsyncIterator[AsyncSession]:
    async with async_session() as session:
        yield session
