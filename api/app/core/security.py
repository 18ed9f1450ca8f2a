"""JWT helpers for verifying identity-provider bearer tokens."""

from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from .config import settings


def create_token(subject: str, expires_delta: timedelta, token_type: str, **claims: Any) -> str:
    """Create a signed JWT for the given subject and token type."""
    now = datetime.utcnow()
    payload: Dict[str, Any] = {
        "sub": subject,
        "type": token_type,
        "iat": now,
        "exp": now + expires_delta,
    }
    payload.update({key: value for key, value in claims.items() if value is not None})
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(subject: str, *, email: str | None = None, name: str | None = None) -> str:
    """Create an access token with the configured TTL."""
    delta = timedelta(minutes=settings.access_token_expires_minutes)
    return create_token(subject, delta, "access", email=email, name=name)


def decode_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode a JWT and return its payload if valid."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
