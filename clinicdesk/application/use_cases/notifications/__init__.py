"""Public helpers for sending and reading notifications."""

from .events import (
    notify_medicine_added,
    notify_medicine_removed,
    notify_medicine_updated,
    notify_schedule_added,
    notify_schedule_removed,
    notify_schedule_updated,
)
from .service import NotificationSender, NotificationService

__all__ = [
    "NotificationSender",
    "NotificationService",
    "notify_medicine_added",
    "notify_medicine_updated",
    "notify_medicine_removed",
    "notify_schedule_added",
    "notify_schedule_updated",
    "notify_schedule_removed",
]
