"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError

from socialnet.db.models import Bookmark, Follow, Post, User
from socialnet.db.session import get_session, transaction

FOLLOW = "follow"
UNFOLLOW = "unfollow"
TOGGLE = "toggle"


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    # -------------------------- users --------------------------
    def get_user(self, user_id: str) -> Optional[User]:
        if not user_id:
            return None
        with get_session() as session:
            return session.get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with get_session() as session:
            stmt = select(User).where(User.email == email)
            return session.execute(stmt).scalar_one_or_none()

    def create_user(self, username: str, email: str, password_hash: str) -> User:
        """Insert a user; IntegrityError propagates when the e-mail is taken."""
        now = datetime.now(timezone.utc)
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            profile_picture="",
            bio="",
            created_at=now,
            updated_at=now,
        )
        with transaction() as session:
            session.add(user)
            session.flush()
        return user

    def update_user_profile(self, user_id: str, values: dict) -> Optional[User]:
        allowed = {k: v for k, v in values.items() if k in {"bio", "gender", "profile_picture"}}
        with transaction() as session:
            user = session.get(User, user_id)
            if not user:
                return None
            if allowed:
                stmt = (
                    update(User)
                    .where(User.id == user_id)
                    .values(**allowed, updated_at=datetime.now(timezone.utc))
                )
                session.execute(stmt)
                session.refresh(user)
            return user

    def list_users_except(self, user_id: str, limit: int | None = None) -> list[User]:
        with get_session() as session:
            stmt = select(User).where(User.id != user_id).order_by(User.created_at.desc(), User.id)
            if limit:
                stmt = stmt.limit(limit)
            return list(session.execute(stmt).scalars().all())

    # -------------------------- graph --------------------------
    def following_ids(self, user_id: str) -> list[str]:
        with get_session() as session:
            stmt = (
                select(Follow.followee_id)
                .where(Follow.follower_id == user_id)
                .order_by(Follow.created_at, Follow.followee_id)
            )
            return list(session.execute(stmt).scalars().all())

    def follower_ids(self, user_id: str) -> list[str]:
        with get_session() as session:
            stmt = (
                select(Follow.follower_id)
                .where(Follow.followee_id == user_id)
                .order_by(Follow.created_at, Follow.follower_id)
            )
            return list(session.execute(stmt).scalars().all())

    def is_following(self, follower_id: str, followee_id: str) -> bool:
        with get_session() as session:
            return session.get(Follow, (follower_id, followee_id)) is not None

    def graph_ids_for(self, user_ids: Iterable[str]) -> tuple[dict[str, list[str]], dict[str, list[str]]]:
        """Return (following, followers) id lists for many users in one query."""
        ids = list(user_ids)
        following: dict[str, list[str]] = {uid: [] for uid in ids}
        followers: dict[str, list[str]] = {uid: [] for uid in ids}
        if not ids:
            return following, followers
        with get_session() as session:
            stmt = (
                select(Follow.follower_id, Follow.followee_id)
                .where(or_(Follow.follower_id.in_(ids), Follow.followee_id.in_(ids)))
                .order_by(Follow.created_at, Follow.follower_id, Follow.followee_id)
            )
            for follower, followee in session.execute(stmt).all():
                if follower in following:
                    following[follower].append(followee)
                if followee in followers:
                    followers[followee].append(follower)
        return following, followers

    @staticmethod
    def _follower_count(session, user_id: str) -> int:
        stmt = select(func.count()).select_from(Follow).where(Follow.followee_id == user_id)
        return int(session.execute(stmt).scalar_one())

    def apply_follow(self, follower_id: str, followee_id: str, mode: str = TOGGLE) -> Optional[tuple[str, int]]:
        """
        Create or remove the follower -> followee edge in one transaction.

        Returns (action, follower_count) where action is "followed" or
        "unfollowed" and the count is read after the write, or None when either
        user does not exist.
        """
        if mode not in {FOLLOW, UNFOLLOW, TOGGLE}:
            raise ValueError(f"unknown follow mode: {mode}")
        with transaction() as session:
            stmt = select(User.id).where(User.id.in_([follower_id, followee_id]))
            found = set(session.execute(stmt).scalars().all())
            if follower_id not in found or followee_id not in found:
                return None
            edge = session.get(Follow, (follower_id, followee_id))
            if edge is not None and mode in {TOGGLE, UNFOLLOW}:
                session.delete(edge)
                action = "unfollowed"
            elif edge is None and mode in {TOGGLE, FOLLOW}:
                session.add(
                    Follow(
                        follower_id=follower_id,
                        followee_id=followee_id,
                        created_at=datetime.now(timezone.utc),
                    )
                )
                action = "followed"
            else:
                action = "followed" if edge is not None else "unfollowed"
            try:
                session.flush()
            except IntegrityError:
                # A concurrent request inserted the same edge first.
                session.rollback()
                return "followed", self._follower_count(session, followee_id)
            return action, self._follower_count(session, followee_id)

    # -------------------------- posts --------------------------
    def create_post(self, author_id: str, content: str, image: str | None = None) -> Post:
        post = Post(author_id=author_id, content=content, image=image, created_at=datetime.now(timezone.utc))
        with transaction() as session:
            session.add(post)
            session.flush()
        return post

    def get_post(self, post_id: str) -> Optional[Post]:
        with get_session() as session:
            return session.get(Post, post_id)

    def posts_by_author(self, author_id: str, *, newest_first: bool = False) -> list[Post]:
        order = (Post.created_at.desc(), Post.id.desc()) if newest_first else (Post.created_at, Post.id)
        with get_session() as session:
            stmt = select(Post).where(Post.author_id == author_id).order_by(*order)
            return list(session.execute(stmt).scalars().all())

    def post_ids_by_authors(self, author_ids: Iterable[str]) -> dict[str, list[str]]:
        ids = list(author_ids)
        result: dict[str, list[str]] = {author: [] for author in ids}
        if not ids:
            return result
        with get_session() as session:
            stmt = (
                select(Post.author_id, Post.id)
                .where(Post.author_id.in_(ids))
                .order_by(Post.created_at, Post.id)
            )
            for author, post_id in session.execute(stmt).all():
                result[author].append(post_id)
        return result

    # -------------------------- bookmarks --------------------------
    def add_bookmark(self, user_id: str, post_id: str) -> None:
        with transaction() as session:
            if session.get(Bookmark, (user_id, post_id)) is None:
                session.add(Bookmark(user_id=user_id, post_id=post_id, created_at=datetime.now(timezone.utc)))

    def remove_bookmark(self, user_id: str, post_id: str) -> None:
        with transaction() as session:
            session.execute(delete(Bookmark).where(Bookmark.user_id == user_id, Bookmark.post_id == post_id))

    def bookmark_ids_for(self, user_ids: Iterable[str]) -> dict[str, list[str]]:
        ids = list(user_ids)
        result: dict[str, list[str]] = {uid: [] for uid in ids}
        if not ids:
            return result
        with get_session() as session:
            stmt = (
                select(Bookmark.user_id, Bookmark.post_id)
                .where(Bookmark.user_id.in_(ids))
                .order_by(Bookmark.created_at, Bookmark.post_id)
            )
            for user_id, post_id in session.execute(stmt).all():
                result[user_id].append(post_id)
        return result

    def bookmarked_posts(self, user_id: str) -> list[Post]:
        with get_session() as session:
            stmt = (
                select(Post)
                .join(Bookmark, Bookmark.post_id == Post.id)
                .where(Bookmark.user_id == user_id)
                .order_by(Bookmark.created_at, Post.id)
            )
            return list(session.execute(stmt).scalars().all())
