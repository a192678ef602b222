"""ORM models used by the application infrastructure."""

from .medicine import MedicineModel
from .notification import NotificationModel
from .schedule import ScheduleModel
from .user import UserModel

__all__ = [
    "MedicineModel",
    "NotificationModel",
    "ScheduleModel",
    "UserModel",
]
