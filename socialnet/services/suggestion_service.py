"""Suggested users: everyone but the caller."""

from __future__ import annotations

from socialnet.repositories.sql_repository import SQLRepository
from socialnet.services.user_views import public_user


class SuggestionService:
    def __init__(self) -> None:
        self.repository = SQLRepository()

    def get_suggested(self, caller_id: str, limit: int | None = None) -> list[dict]:
        users = self.repository.list_users_except(caller_id, limit=limit)
        ids = [u.id for u in users]
        # one query per relation, whatever the number of users
        post_ids = self.repository.post_ids_by_authors(ids)
        following, followers = self.repository.graph_ids_for(ids)
        bookmarks = self.repository.bookmark_ids_for(ids)
        return [
            public_user(
                user,
                following=following[user.id],
                followers=followers[user.id],
                posts=post_ids[user.id],
                bookmarks=bookmarks[user.id],
            )
            for user in users
        ]
