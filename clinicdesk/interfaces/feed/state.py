"""Immutable snapshots describing what the badge and feed display."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from clinicdesk.domain.entities import Notification
from clinicdesk.utils import format_time_ago


class FeedStatus(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


def format_badge(count: int, limit: int) -> str:
    """Return the badge label: hidden at zero, capped as ``"<limit>+"``."""

    if count <= 0:
        return ""
    if count > limit:
        return f"{limit}+"
    return str(count)


@dataclass(frozen=True)
class FeedState:
    """Snapshot of the presenter. Replaced wholesale on every change."""

    status: FeedStatus = FeedStatus.CLOSED
    unread_count: int = 0
    badge_text: str = ""
    entries: tuple[Notification, ...] = ()

    @property
    def is_open(self) -> bool:
        return self.status is FeedStatus.OPEN


@dataclass(frozen=True)
class FeedEntryView:
    """Display-ready projection of a notification."""

    id: int
    title: str
    message: str
    is_read: bool
    time_ago: str

    @classmethod
    def from_notification(
        cls, notification: Notification, *, now: datetime | None = None
    ) -> "FeedEntryView":
        return cls(
            id=notification.id or 0,
            title=notification.title,
            message=notification.message,
            is_read=notification.is_read,
            time_ago=format_time_ago(notification.created_at, now=now),
        )


__all__ = ["FeedEntryView", "FeedState", "FeedStatus", "format_badge"]
