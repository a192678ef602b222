"""Shared fixtures: isolated SQLite stores, change feeds and users."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "clinicdesk_test_api.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["APP_TIMEZONE"] = "UTC"

from clinicdesk.config import get_settings  # noqa: E402

get_settings.cache_clear()

from clinicdesk.application.auth import RequestAuthContext  # noqa: E402
from clinicdesk.application.use_cases.notifications import NotificationService  # noqa: E402
from clinicdesk.application.use_cases.users import register_user  # noqa: E402
from clinicdesk.domain.entities import UserType  # noqa: E402
from clinicdesk.infrastructure.database import (  # noqa: E402
    build_engine,
    create_session_factory,
    initialize_database,
)
from clinicdesk.infrastructure.realtime import ChangeFeed  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def engine(tmp_path):
    """File-backed SQLite engine so worker threads get their own connections."""

    test_engine = build_engine(f"sqlite:///{tmp_path / 'store.db'}")
    initialize_database(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def feed():
    return ChangeFeed()


@pytest.fixture
def make_user(session_factory):
    """Register a user and return the domain entity."""

    counter = {"value": 0}

    def _make_user(name: str = "User", *, user_type: UserType = UserType.USER, password="secret1"):
        counter["value"] += 1
        with session_factory() as session:
            return register_user(
                session,
                name=name,
                email=f"{name.lower().replace(' ', '.')}{counter['value']}@example.com",
                password=password,
                user_type=user_type,
            )

    return _make_user


@pytest.fixture
def service_for(session_factory, feed):
    """Build a :class:`NotificationService` acting as ``user`` (``None`` for anonymous)."""

    def _service_for(user):
        return NotificationService(session_factory, RequestAuthContext(user), feed=feed)

    return _service_for
