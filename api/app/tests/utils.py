"""Shared helpers for API tests."""

from __future__ import annotations

import uuid
from typing import Any

from httpx import AsyncClient

from app.core.security import create_access_token


def new_uid(prefix: str = "user") -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


def auth_headers(uid: str, **claims: str) -> dict[str, str]:
    """Bearer header for a token the identity provider would have issued."""
    return {"Authorization": f"Bearer {create_access_token(uid, **claims)}"}


async def create_item(client: AsyncClient, uid: str, **fields: Any) -> dict[str, Any]:
    """Log an item through the API and return the created record."""
    response = await client.post("/api/media", json=fields, headers=auth_headers(uid))
    assert response.status_code == 201, response.text
    return response.json()
