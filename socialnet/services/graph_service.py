"""Follow/unfollow use cases over the social graph."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from socialnet.core.errors import NotFoundError, SelfReferenceError
from socialnet.repositories.sql_repository import FOLLOW, TOGGLE, UNFOLLOW, SQLRepository

logger = logging.getLogger(__name__)

FOLLOWED = "followed"
UNFOLLOWED = "unfollowed"


@dataclass
class FollowResult:
    action: str
    follower_count: int

    @property
    def message(self) -> str:
        return "Followed successfully" if self.action == FOLLOWED else "Unfollowed successfully"


class GraphService:
    """Maintains follow edges between users."""

    def __init__(self) -> None:
        self.repository = SQLRepository()

    def _apply(self, caller_id: str, target_id: str, mode: str) -> FollowResult:
        if caller_id == target_id:
            raise SelfReferenceError("You cannot follow/unfollow yourself")
        outcome = self.repository.apply_follow(caller_id, target_id, mode)
        if outcome is None:
            raise NotFoundError("User not found")
        action, count = outcome
        logger.info("Graph edge %s", action, extra={"follower_id": caller_id, "followee_id": target_id})
        return FollowResult(action=action, follower_count=count)

    def follow_or_unfollow(self, caller_id: str, target_id: str) -> FollowResult:
        """Toggle the caller -> target edge."""
        return self._apply(caller_id, target_id, TOGGLE)

    def follow(self, caller_id: str, target_id: str) -> FollowResult:
        return self._apply(caller_id, target_id, FOLLOW)

    def unfollow(self, caller_id: str, target_id: str) -> FollowResult:
        return self._apply(caller_id, target_id, UNFOLLOW)
