"""Functions for signing and reading stateless session tokens."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from socialnet.core.config import get_settings

ALGORITHM = "HS256"


class InvalidToken(Exception):
    """Token is malformed, forged or expired."""


def encode(user_id: str, *, now: datetime | None = None) -> str:
    """Sign a token carrying the user id, valid for the configured session TTL."""
    settings = get_settings()
    issued = now or datetime.now(timezone.utc)
    claims = {
        "userId": user_id,
        "iat": int(issued.timestamp()),
        "exp": int((issued + timedelta(seconds=settings.session_ttl_seconds)).timestamp()),
    }
    return jwt.encode(claims, settings.secret_key, algorithm=ALGORITHM)


def decode(token: str) -> dict:
    """Verify signature and expiry, returning the claims."""
    try:
        data: dict = jwt.decode(token, get_settings().secret_key, algorithms=[ALGORITHM])
    except jwt.exceptions.PyJWTError as e:
        raise InvalidToken("Not a valid token") from e
    if not data.get("userId"):
        raise InvalidToken("Token has no subject")
    return data
