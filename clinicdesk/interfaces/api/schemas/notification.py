"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class NotificationCreate(BaseModel):
    """Payload used by administrators to send a notification.

    Leaving ``owner_id`` empty broadcasts the notification to every user.
    """

    title: str = Field(..., min_length=1, max_length=120)
    message: str = Field(..., min_length=1)
    owner_id: int | None = Field(default=None, ge=1)


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    title: str
    message: str
    owner_id: int | None = None
    is_read: bool
    created_at: datetime | None = None


__all__ = ["NotificationCreate", "NotificationRead"]
