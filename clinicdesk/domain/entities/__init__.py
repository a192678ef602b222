"""Domain entities exposed by the application."""

from .change_event import ChangeEvent, ChangeKind
from .medicine import MEDICINE_STATUSES, Medicine
from .notification import Notification
from .schedule import SCHEDULE_STATUSES, WEEKDAYS, Schedule
from .user import User, UserType

__all__ = [
    "ChangeEvent",
    "ChangeKind",
    "MEDICINE_STATUSES",
    "Medicine",
    "Notification",
    "SCHEDULE_STATUSES",
    "WEEKDAYS",
    "Schedule",
    "User",
    "UserType",
]
