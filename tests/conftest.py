from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Make the socialnet package importable when running from a checkout.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from socialnet.core import config as core_config  # noqa: E402
from socialnet.db import create_tables  # noqa: E402
from socialnet.db import session as db_session  # noqa: E402
from socialnet.db.models import Post  # noqa: E402
from socialnet.repositories.sql_repository import SQLRepository  # noqa: E402
from socialnet.services.auth_service import AuthService  # noqa: E402

SECRET = "test-secret"


def _reset_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def db_env(tmp_path, monkeypatch):
    """Point the app at a temporary SQLite file and reset cached settings/engine."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("SECRET_KEY", SECRET)
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.delenv("COOKIE_SECURE", raising=False)
    monkeypatch.delenv("SESSION_TTL_SECONDS", raising=False)
    _reset_caches()

    create_tables.drop_all()
    create_tables.create_all()

    yield db_file

    create_tables.drop_all()
    db_session.get_engine().dispose()
    _reset_caches()


@pytest.fixture()
def repo(db_env):
    return SQLRepository()


@pytest.fixture()
def make_user(db_env):
    """Register a user through the service and return its id."""
    svc = AuthService()

    def _make(username: str, password: str = "pw123456", email: str | None = None) -> str:
        return svc.register(username, email or f"{username}@example.com", password)

    return _make


@pytest.fixture()
def make_post(db_env):
    """Insert a post with a controlled timestamp (minutes after a fixed origin)."""
    origin = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _make(author_id: str, content: str, minute: int = 0) -> str:
        post = Post(author_id=author_id, content=content, created_at=origin + timedelta(minutes=minute))
        with db_session.get_session() as session:
            session.add(post)
            session.commit()
            return post.id

    return _make


@pytest.fixture()
def app(db_env):
    from socialnet.app import create_app

    return create_app()
