"""Session helpers (issue tokens, cookies, validation)."""
from __future__ import annotations

from fastapi import Request, Response

from socialnet.core import tokens
from socialnet.core.config import get_settings
from socialnet.core.errors import UnauthorizedError

SESSION_COOKIE_NAME = "token"


def issue_session(user_id: str) -> str:
    """Sign a stateless session token for the user."""
    return tokens.encode(user_id)


def session_user_id(token: str | None) -> str | None:
    if not token:
        return None
    try:
        return tokens.decode(token)["userId"]
    except tokens.InvalidToken:
        return None


def current_user_id(request: Request) -> str:
    """FastAPI dependency: the id carried by the session cookie."""
    user_id = session_user_id(request.cookies.get(SESSION_COOKIE_NAME))
    if not user_id:
        raise UnauthorizedError()
    return user_id


def set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
        max_age=settings.session_ttl_seconds,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.set_cookie(SESSION_COOKIE_NAME, "", max_age=0, httponly=True, samesite="strict", path="/")
