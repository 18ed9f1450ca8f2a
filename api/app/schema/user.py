"""User request/response schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from app.schema.base import CamelModel


class UserRead(CamelModel):
    """User profile fields exposed in API responses."""
    id: UUID
    uid: str
    email: str | None = None
    display_name: str | None = None
    created_at: datetime
