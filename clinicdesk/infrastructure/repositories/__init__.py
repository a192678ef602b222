"""Repository implementations for infrastructure layer."""

from .medicine_repository import MedicineRepository
from .notification_repository import NotificationRepository
from .schedule_repository import ScheduleRepository
from .user_repository import UserRepository

__all__ = [
    "MedicineRepository",
    "NotificationRepository",
    "ScheduleRepository",
    "UserRepository",
]
