"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from clinicdesk.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "UTC"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone.

    The timezone is resolved from the ``APP_TIMEZONE`` setting. Offsets such
    as ``UTC-05:00`` are accepted when no IANA zone matches; anything else
    falls back to UTC.
    """

    settings = get_settings()
    tz_name = (settings.app_timezone or "").strip() or _DEFAULT_TIMEZONE
    return _resolve_timezone(tz_name)


def now_in_app_timezone() -> datetime:
    """Return the current time localized to the configured timezone."""

    return datetime.now(tz=get_app_timezone())


def now_in_utc_naive_datetime() -> datetime:
    """Return the current UTC time without ``tzinfo``, the storage format.

    SQLite drops offsets on ``DATETIME`` columns. UTC keeps stored values
    monotonic across daylight saving transitions of the app timezone.
    """

    return datetime.now(tz=timezone.utc).replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Normalize ``value`` so it is expressed in the configured timezone."""

    if value is None:
        return None

    tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def localize_stored_datetime(value: datetime | None) -> datetime | None:
    """Interpret a stored naive UTC ``value`` and express it in the app timezone."""

    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(get_app_timezone())


def format_time_ago(value: datetime | None, *, now: datetime | None = None) -> str:
    """Describe how long ago ``value`` happened, e.g. ``"5 minutes ago"``."""

    if value is None:
        return ""

    reference = ensure_app_timezone(now) if now is not None else now_in_app_timezone()
    elapsed = int((reference - ensure_app_timezone(value)).total_seconds())

    if elapsed < 60:
        return "Just now"
    if elapsed < 3600:
        return _pluralize(elapsed // 60, "minute")
    if elapsed < 86400:
        return _pluralize(elapsed // 3600, "hour")
    return _pluralize(elapsed // 86400, "day")


def _pluralize(amount: int, unit: str) -> str:
    suffix = "s" if amount > 1 else ""
    return f"{amount} {unit}{suffix} ago"


def _resolve_timezone(tz_name: str) -> tzinfo:
    """Resolve ``tz_name`` into a ``timezone`` instance."""

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        match = _OFFSET_PATTERN.match(tz_name)
        if match:
            sign = -1 if match.group("sign") == "-" else 1
            hours = int(match.group("hours"))
            minutes = int(match.group("minutes") or 0)
            offset = timedelta(hours=hours, minutes=minutes)
            return timezone(sign * offset)
    return timezone.utc
