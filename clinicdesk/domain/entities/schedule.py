"""Domain entity representing a doctor's consultation schedule."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

SCHEDULE_STATUSES = ("scheduled", "cancelled", "completed")
WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


@dataclass
class Schedule:
    """Consultation slot offered by a doctor on a given weekday."""

    id: int | None
    title: str
    doctor: str
    day: str
    start_time: str
    end_time: str
    status: str = "scheduled"
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["SCHEDULE_STATUSES", "WEEKDAYS", "Schedule"]
