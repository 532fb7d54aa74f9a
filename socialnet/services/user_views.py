"""
Shape users and posts into the JSON documents returned to clients.

The password hash never leaves this module: public views are built field by
field from the entity.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from socialnet.db.models import Post, User


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def post_view(post: Post) -> dict:
    return {
        "id": post.id,
        "author": post.author_id,
        "content": post.content or "",
        "image": post.image,
        "createdAt": _iso(post.created_at),
    }


def public_user(
    user: User,
    *,
    following: Iterable[str] = (),
    followers: Iterable[str] = (),
    posts: Iterable = (),
    bookmarks: Iterable = (),
) -> dict:
    """Build the public view of a user.

    ``posts`` and ``bookmarks`` may hold ids or already rendered post
    documents, depending on how much the caller expanded.
    """
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "profilePicture": user.profile_picture or "",
        "bio": user.bio or "",
        "gender": user.gender,
        "following": list(following),
        "followers": list(followers),
        "posts": list(posts),
        "bookmarks": list(bookmarks),
        "createdAt": _iso(user.created_at),
    }
