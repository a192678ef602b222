"""SQLAlchemy model for doctor schedules."""

from sqlalchemy import Column, DateTime, Integer, String

from clinicdesk.infrastructure.database import Base
from clinicdesk.utils import now_in_utc_naive_datetime


class ScheduleModel(Base):
    __tablename__ = "schedules"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(120), nullable=False, index=True)
    doctor = Column(String(100), nullable=False)
    day = Column(String(10), nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    status = Column(String(20), nullable=False, default="scheduled")
    created_at = Column(DateTime, nullable=False, default=now_in_utc_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_utc_naive_datetime)


__all__ = ["ScheduleModel"]
