"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_app_timezone,
    format_time_ago,
    get_app_timezone,
    localize_stored_datetime,
    now_in_app_timezone,
    now_in_utc_naive_datetime,
)

__all__ = [
    "ensure_app_timezone",
    "format_time_ago",
    "get_app_timezone",
    "localize_stored_datetime",
    "now_in_app_timezone",
    "now_in_utc_naive_datetime",
]
