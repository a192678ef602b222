"""Notification badge and dropdown feed presenter."""

from .presenter import FeedHandlers, FeedRenderer, NotificationFeedPresenter
from .state import FeedEntryView, FeedState, FeedStatus, format_badge

__all__ = [
    "FeedEntryView",
    "FeedHandlers",
    "FeedRenderer",
    "FeedState",
    "FeedStatus",
    "NotificationFeedPresenter",
    "format_badge",
]
