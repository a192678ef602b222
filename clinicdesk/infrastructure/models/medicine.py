"""SQLAlchemy model for the medicines inventory."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from clinicdesk.infrastructure.database import Base
from clinicdesk.utils import now_in_utc_naive_datetime


class MedicineModel(Base):
    __tablename__ = "medicines"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False, index=True)
    description = Column(Text, nullable=True)
    quantity = Column(Integer, nullable=False, default=0)
    status = Column(String(20), nullable=False, default="available")
    created_at = Column(DateTime, nullable=False, default=now_in_utc_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_utc_naive_datetime)


__all__ = ["MedicineModel"]
