"""Profile read/update use cases."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional

from socialnet.core.errors import NotFoundError, ValidationError
from socialnet.core.storage import MAX_UPLOAD_BYTES, has_valid_signature, upload_image
from socialnet.repositories.sql_repository import SQLRepository
from socialnet.services.user_views import post_view, public_user

logger = logging.getLogger(__name__)


@dataclass
class ImageUpload:
    data: bytes
    content_type: str


class ProfileService:
    """Fetch and edit user profiles."""

    def __init__(self) -> None:
        self.repository = SQLRepository()

    def _view(self, user, *, expand: bool) -> dict:
        if expand:
            posts = [post_view(p) for p in self.repository.posts_by_author(user.id, newest_first=True)]
            bookmarks = [post_view(p) for p in self.repository.bookmarked_posts(user.id)]
        else:
            posts = [p.id for p in self.repository.posts_by_author(user.id)]
            bookmarks = [p.id for p in self.repository.bookmarked_posts(user.id)]
        return public_user(
            user,
            following=self.repository.following_ids(user.id),
            followers=self.repository.follower_ids(user.id),
            posts=posts,
            bookmarks=bookmarks,
        )

    def get_profile(self, user_id: str) -> dict:
        """Public view with posts (newest first) and bookmarks expanded inline."""
        user = self.repository.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return self._view(user, expand=True)

    def edit_profile(
        self,
        caller_id: str,
        *,
        bio: Optional[str] = None,
        gender: Optional[str] = None,
        image: Optional[ImageUpload] = None,
    ) -> dict:
        """
        Apply the fields present in the request; absent or empty ones are left alone.

        The image, when given, is uploaded before anything is written, so a
        failed upload leaves the profile unchanged.
        """
        user = self.repository.get_user(caller_id)
        if not user:
            raise NotFoundError("User not found.")
        changes: dict = {}
        if bio:
            changes["bio"] = bio
        if gender:
            changes["gender"] = gender
        if image is not None:
            if not image.data:
                raise ValidationError("Empty image file.")
            if len(image.data) > MAX_UPLOAD_BYTES:
                raise ValidationError("Image exceeds 2MB.")
            if not has_valid_signature(image.data, image.content_type):
                raise ValidationError("Invalid image file.")
            changes["profile_picture"] = upload_image(image.data, image.content_type)
        updated = self.repository.update_user_profile(caller_id, changes)
        if not updated:
            raise NotFoundError("User not found.")
        logger.info("Profile updated", extra={"user_id": caller_id, "fields": sorted(changes)})
        return self._view(updated, expand=False)
