"""Async HTTP client for the socialnet JSON API."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response or transport failure.

    ``status_code`` is None when the request never got a response.
    """

    def __init__(self, status_code: Optional[int], payload: dict):
        self.status_code = status_code
        self.payload = payload
        super().__init__(payload.get("message") or f"HTTP {status_code}")


class SocialApiClient:
    """Thin wrapper over httpx.AsyncClient; the session cookie lives in its jar."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "SocialApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            logger.warning("Request %s %s failed: %s", method, path, exc)
            raise ApiError(None, {"message": str(exc) or "Network error", "success": False}) from exc
        try:
            payload = response.json()
        except ValueError:
            payload = {"message": response.text, "success": False}
        if response.is_error:
            raise ApiError(response.status_code, payload)
        return payload

    async def register(self, username: str, email: str, password: str) -> dict:
        return await self._request("POST", "/register", json={"username": username, "email": email, "password": password})

    async def login(self, email: str, password: str) -> dict:
        return await self._request("POST", "/login", json={"email": email, "password": password})

    async def logout(self) -> dict:
        payload = await self._request("POST", "/logout")
        self._http.cookies.clear()
        return payload

    async def get_profile(self, user_id: str) -> dict:
        return await self._request("GET", f"/profile/{user_id}")

    async def edit_profile(
        self,
        *,
        bio: str | None = None,
        gender: str | None = None,
        image: tuple[str, bytes, str] | None = None,
    ) -> dict:
        """``image`` is (filename, data, content_type)."""
        data = {k: v for k, v in {"bio": bio, "gender": gender}.items() if v}
        files = {"image": image} if image else None
        return await self._request("POST", "/profile/edit", data=data, files=files)

    async def get_suggested(self) -> dict:
        return await self._request("GET", "/suggested")

    async def follow(self, user_id: str) -> dict:
        return await self._request("POST", f"/users/{user_id}/follow")

    async def unfollow(self, user_id: str) -> dict:
        return await self._request("POST", f"/users/{user_id}/unfollow")

    async def follow_or_unfollow(self, user_id: str) -> dict:
        return await self._request("POST", f"/users/{user_id}/follow-or-unfollow")
