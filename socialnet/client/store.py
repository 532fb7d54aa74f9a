"""
In-memory state container for the authenticated session.

Mirrors the server's view of the current user and of the profile on screen.
Follow/unfollow actions call the API and, on success, merge the edge change
into the local copies instead of re-fetching both users. The follower count
echoed by the server is stored next to the merged list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Callable, Optional

from socialnet.client.api_client import ApiError, SocialApiClient

logger = logging.getLogger(__name__)

IDLE = "idle"
LOADING = "loading"
SUCCEEDED = "succeeded"
FAILED = "failed"

Listener = Callable[["AuthState"], None]


@dataclass
class AuthState:
    user: Optional[dict] = None
    suggested_users: list[dict] = field(default_factory=list)
    user_profile: Optional[dict] = None
    selected_user: Optional[dict] = None
    status: str = IDLE
    error: Any = None


class AuthStore:
    def __init__(self, api: SocialApiClient, state: AuthState | None = None) -> None:
        self.api = api
        self.state = state or AuthState()
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback run after every state change; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)

    # -------------------------------------- setters --------------------------------------
    def set_auth_user(self, user: Optional[dict]) -> None:
        self.state.user = user
        self._notify()

    def set_suggested_users(self, users: list[dict]) -> None:
        self.state.suggested_users = list(users or [])
        self._notify()

    def set_user_profile(self, profile: Optional[dict]) -> None:
        self.state.user_profile = profile
        self._notify()

    def set_selected_user(self, user: Optional[dict]) -> None:
        self.state.selected_user = user
        self._notify()

    # -------------------------------------- follow/unfollow --------------------------------------
    def _pending(self) -> None:
        self.state.status = LOADING
        self._notify()

    def _rejected(self, exc: ApiError) -> None:
        self.state.status = FAILED
        self.state.error = exc.payload
        logger.info("Graph action rejected: %s", exc)
        self._notify()

    def _profile_is(self, user_id: str) -> bool:
        profile = self.state.user_profile
        return bool(profile) and profile.get("id") == user_id

    async def follow_user(self, user_id: str) -> bool:
        follower_id = (self.state.user or {}).get("id")
        self._pending()
        try:
            payload = await self.api.follow(user_id)
        except ApiError as exc:
            self._rejected(exc)
            return False

        self.state.status = SUCCEEDED
        if self._profile_is(user_id):
            followers = self.state.user_profile.setdefault("followers", [])
            if follower_id and follower_id not in followers:
                followers.append(follower_id)
            self._echo_count(payload)
        if self.state.user is not None:
            following = self.state.user.setdefault("following", [])
            if user_id not in following:
                following.append(user_id)
        self.state.error = None
        self._notify()
        return True

    async def unfollow_user(self, user_id: str) -> bool:
        follower_id = (self.state.user or {}).get("id")
        self._pending()
        try:
            payload = await self.api.unfollow(user_id)
        except ApiError as exc:
            self._rejected(exc)
            return False

        self.state.status = SUCCEEDED
        if self._profile_is(user_id):
            profile = self.state.user_profile
            profile["followers"] = [fid for fid in profile.get("followers", []) if fid != follower_id]
            self._echo_count(payload)
        if self.state.user is not None:
            self.state.user["following"] = [fid for fid in self.state.user.get("following", []) if fid != user_id]
        self.state.error = None
        self._notify()
        return True

    def _echo_count(self, payload: dict) -> None:
        count = payload.get("updatedFollowerCount")
        if count is not None:
            self.state.user_profile["followerCount"] = count

    # -------------------------------------- loaders --------------------------------------
    async def login(self, email: str, password: str) -> bool:
        self._pending()
        try:
            payload = await self.api.login(email, password)
        except ApiError as exc:
            self._rejected(exc)
            return False
        self.state.status = SUCCEEDED
        self.state.error = None
        self.set_auth_user(payload.get("user"))
        return True

    async def logout(self) -> None:
        try:
            await self.api.logout()
        finally:
            self.state = AuthState()
            self._notify()

    async def load_suggested_users(self) -> list[dict]:
        try:
            payload = await self.api.get_suggested()
        except ApiError as exc:
            # 400 means nobody to suggest, not a broken session.
            if exc.status_code == 400:
                self.set_suggested_users([])
                return []
            self._rejected(exc)
            return []
        users = payload.get("users") or []
        self.set_suggested_users(users)
        return users

    async def load_user_profile(self, user_id: str) -> Optional[dict]:
        try:
            payload = await self.api.get_profile(user_id)
        except ApiError as exc:
            self._rejected(exc)
            return None
        self.set_user_profile(payload.get("user"))
        return self.state.user_profile
