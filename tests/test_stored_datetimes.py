"""Timestamps are stored in UTC and localized to the app timezone on read."""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from clinicdesk.infrastructure.models import NotificationModel
from clinicdesk.infrastructure.repositories import NotificationRepository
from clinicdesk.utils import datetime as app_datetime
from clinicdesk.utils import localize_stored_datetime, now_in_utc_naive_datetime


@pytest.fixture
def new_york(monkeypatch):
    try:
        zone = ZoneInfo("America/New_York")
    except ZoneInfoNotFoundError:
        pytest.skip("tz database not available")
    monkeypatch.setattr(app_datetime, "get_app_timezone", lambda: zone)
    return zone


def test_storage_clock_is_naive_utc():
    stored = now_in_utc_naive_datetime()
    reference = datetime.now(tz=timezone.utc).replace(tzinfo=None)

    assert stored.tzinfo is None
    assert abs((reference - stored).total_seconds()) < 5


def test_repeated_local_hour_keeps_insertion_order(new_york):
    # 2024-11-03 01:30 happens twice in New York
    first = localize_stored_datetime(datetime(2024, 11, 3, 5, 30))
    second = localize_stored_datetime(datetime(2024, 11, 3, 6, 30))

    assert first.replace(tzinfo=None) == second.replace(tzinfo=None)
    assert first.utcoffset() != second.utcoffset()
    assert first < second


def test_localize_leaves_none_untouched():
    assert localize_stored_datetime(None) is None


def test_repository_writes_utc_and_reads_app_timezone(session_factory, new_york):
    with session_factory() as session:
        notification = NotificationRepository(session).create("Shift change", "Details")
        row = session.get(NotificationModel, notification.id)
        stored = row.created_at

    assert notification.created_at.tzinfo is new_york
    assert notification.created_at.astimezone(timezone.utc).replace(tzinfo=None) == stored
