"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import expression

from clinicdesk.infrastructure.database import Base
from clinicdesk.utils import now_in_utc_naive_datetime


class NotificationModel(Base):
    """Database representation for notifications.

    A ``NULL`` ``owner_id`` marks a broadcast row shared by every user.
    """

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(120), nullable=False)
    message = Column(Text, nullable=False)
    owner_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True
    )
    is_read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_utc_naive_datetime)


__all__ = ["NotificationModel"]
