from .auth import RegisterRequest, Token, UserRead
from .envelope import OperationResponse
from .medicine import MedicineCreate, MedicineRead, MedicineUpdate
from .notification import NotificationCreate, NotificationRead
from .schedule import ScheduleCreate, ScheduleRead, ScheduleUpdate

__all__ = [
    "MedicineCreate",
    "MedicineRead",
    "MedicineUpdate",
    "NotificationCreate",
    "NotificationRead",
    "OperationResponse",
    "RegisterRequest",
    "ScheduleCreate",
    "ScheduleRead",
    "ScheduleUpdate",
    "Token",
    "UserRead",
]
