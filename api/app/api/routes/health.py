"""Liveness endpoint with a database reachability probe."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db

logger = logging.getLogger("app.api.health")

router = APIRouter()


@router.get("/health")
async def health(session: AsyncSession = Depends(get_db)) -> dict[str, Any]:
    """Return service status; the store is probed with `SELECT 1`."""
    try:
        await session.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as exc:
        logger.warning("Health probe could not reach the database: %s", exc.__class__.__name__)
        database = "unavailable"
    return {"status": "ok" if database == "ok" else "degraded", "database": database}
