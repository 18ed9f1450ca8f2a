from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import Unauthorized
from app.core.security import decode_token
from app.db.session import get_session
from app.schema.auth import TokenIdentity

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db() -> AsyncSession:
    async for session in get_session():
        yield session


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> TokenIdentity:
    if credentials is None or not credentials.credentials:
        raise Unauthorized("No token provided")

    payload = decode_token(credentials.credentials)
    if not payload or payload.get("type") != "access":
        raise Unauthorized("Invalid token")
    uid = payload.get("sub")
    if not uid:
        raise Unauthorized("Invalid token")
    return TokenIdentity(uid=str(uid), email=payload.get("email"), display_name=payload.get("name"))


async def get_current_uid(identity: TokenIdentity = Depends(get_current_identity)) -> str:
    return identity.uid
