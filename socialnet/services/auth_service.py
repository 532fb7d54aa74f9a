"""
Registration and login use cases.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging

from sqlalchemy.exc import IntegrityError

from socialnet.core.errors import ConflictError, InvalidCredentialsError, ValidationError
from socialnet.core.security import burn_verification, hash_password, verify_password
from socialnet.repositories.sql_repository import SQLRepository
from socialnet.services.session_service import issue_session
from socialnet.services.user_views import post_view, public_user

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


@dataclass
class LoginSuccess:
    token: str
    user: dict


@dataclass
class AuthService:
    """Handles registration and login."""

    def __post_init__(self):
        self.repository = SQLRepository()

    def register(self, username: str | None, email: str | None, password: str | None) -> str:
        """Create an account and return the new user id."""
        raw_username = (username or "").strip()
        raw_email = normalize_email(email)
        if not raw_username or not raw_email or not password:
            raise ValidationError("All fields are required")
        if self.repository.get_user_by_email(raw_email):
            raise ConflictError("Email already in use")
        try:
            user = self.repository.create_user(raw_username, raw_email, hash_password(password))
        except IntegrityError as exc:
            raise ConflictError("Email already in use") from exc
        logger.info("Registered user", extra={"user_id": user.id})
        return user.id

    def login(self, email: str | None, password: str | None) -> LoginSuccess:
        raw_email = normalize_email(email)
        if not raw_email or not password:
            raise ValidationError("Email and password are required")
        user = self.repository.get_user_by_email(raw_email)
        if not user:
            burn_verification(password)
            logger.warning("Login failed: unknown email")
            raise InvalidCredentialsError(INVALID_CREDENTIALS)
        if not verify_password(password, user.password_hash):
            logger.warning("Login failed: bad password", extra={"user_id": user.id})
            raise InvalidCredentialsError(INVALID_CREDENTIALS)

        token = issue_session(user.id)
        # Only posts whose stored author is still this user are exposed.
        owned = [post_view(p) for p in self.repository.posts_by_author(user.id) if p.author_id == user.id]
        view = public_user(
            user,
            following=self.repository.following_ids(user.id),
            followers=self.repository.follower_ids(user.id),
            posts=owned,
            bookmarks=[p.id for p in self.repository.bookmarked_posts(user.id)],
        )
        logger.info("User logged in", extra={"user_id": user.id})
        return LoginSuccess(token=token, user=view)
