"""SQLAlchemy model for the users table."""

from sqlalchemy import Column, DateTime, Integer, String

from clinicdesk.infrastructure.database import Base
from clinicdesk.utils import now_in_utc_naive_datetime


class UserModel(Base):
    """Database representation of an application user."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False, default="user")
    created_at = Column(DateTime, nullable=False, default=now_in_utc_naive_datetime)


__all__ = ["UserModel"]
