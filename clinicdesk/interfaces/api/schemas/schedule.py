"""Schedule schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ScheduleStatus = Literal["scheduled", "cancelled", "completed"]


class ScheduleCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=120)
    doctor: str = Field(..., min_length=1, max_length=100)
    day: str = Field(..., description="Weekday name, e.g. monday")
    start_time: str = Field(..., description="HH:MM")
    end_time: str = Field(..., description="HH:MM")
    status: ScheduleStatus = "scheduled"


class ScheduleUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=120)
    doctor: str | None = Field(default=None, min_length=1, max_length=100)
    day: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    status: ScheduleStatus | None = None

    model_config = ConfigDict(extra="forbid")


class ScheduleRead(BaseModel):
    id: int
    title: str
    doctor: str
    day: str
    start_time: str
    end_time: str
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
