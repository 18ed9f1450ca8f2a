"""User profile endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_identity, get_db
from app.models.user import User
from app.schema.auth import TokenIdentity
from app.schema.user import UserRead
from app.services import user_service

router = APIRouter()


@router.get("/me", response_model=UserRead)
async def read_current_user(
    identity: TokenIdentity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db),
) -> User:
    """Return the caller's profile, creating it on first request."""
    return await user_service.get_or_create_user(session, identity)
