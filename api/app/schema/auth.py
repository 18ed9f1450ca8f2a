"""Identity derived from a verified bearer token."""

from __future__ import annotations

from pydantic import BaseModel


class TokenIdentity(BaseModel):
    """Stable user id plus optional profile claims."""
    uid: str
    email: str | None = None
    display_name: str | None = None
