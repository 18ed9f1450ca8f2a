"""Local library view with optimistic favorite toggling.

Invariants:
- A failed toggle restores the whole pre-toggle list, not just the one field.
- Server responses replace local entries wholesale.
"""

from __future__ import annotations

import logging
from typing import Any

from app.client.api import MediaApiClient

logger = logging.getLogger("app.client.library")


class MediaLibrary:
    """Client-side list of the caller's items kept in sync with the API."""

    def __init__(self, api: MediaApiClient) -> None:
        self.api = api
        self.items: list[dict[str, Any]] = []

    async def refresh(self, **filters: str) -> list[dict[str, Any]]:
        self.items = await self.api.list_items(**filters)
        return self.items

    def find(self, item_id: str) -> dict[str, Any] | None:
        return next((item for item in self.items if item.get("id") == item_id), None)

    async def add(self, fields: dict[str, Any]) -> dict[str, Any]:
        created = await self.api.create_item(fields)
        self.items = [created, *self.items]
        return created

    async def update(self, item_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        updated = await self.api.update_item(item_id, fields)
        self._replace(updated)
        return updated

    async def remove(self, item_id: str) -> None:
        await self.api.delete_item(item_id)
        self.items = [item for item in self.items if item.get("id") != item_id]

    async def toggle_favorite(self, item_id: str, favorite: bool) -> dict[str, Any]:
        """Apply the flag locally, then confirm with the API or roll back."""
        snapshot = self.items
        self.items = [{**item, "favorite": favorite} if item.get("id") == item_id else item for item in snapshot]
        try:
            confirmed = await self.api.set_favorite(item_id, favorite)
        except Exception:
            logger.warning("Favorite toggle failed for %s; restoring previous list", item_id)
            self.items = snapshot
            raise
        self._replace(confirmed)
        return confirmed

    def _replace(self, updated: dict[str, Any]) -> None:
        self.items = [updated if item.get("id") == updated.get("id") else item for item in self.items]
