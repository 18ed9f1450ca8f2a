from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.schema.auth import TokenIdentity

logger = logging.getLogger("app.services.user")


async def get_user_by_uid(session: AsyncSession, uid: str) -> User | None:
    result = await session.execute(select(User).where(User.uid == uid))
    return result.scalar_one_or_none()


async def get_or_create_user(session: AsyncSession, identity: TokenIdentity) -> User:
    """Return the caller's profile, creating it on first sight and refreshing claims."""
    user = await get_user_by_uid(session, identity.uid)
    if user is None:
        user = User(
            uid=identity.uid,
            email=identity.email.lower() if identity.email else None,
            display_name=identity.display_name,
        )
        session.add(user)
        try:
            await session.commit()
        except IntegrityError:
            # A concurrent first request created the row.
            await session.rollback()
            existing = await get_user_by_uid(session, identity.uid)
            if existing is None:
                raise
            return existing
        logger.info("Created profile for uid %s", identity.uid)
        return user

    changed = False
    if identity.email and user.email != identity.email.lower():
        user.email = identity.email.lower()
        changed = True
    if identity.display_name and user.display_name != identity.display_name:
        user.display_name = identity.display_name
        changed = True
    if changed:
        await session.commit()
    return user
