"""Domain entity representing a notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Notification:
    """Message visible to one user, or to everybody when ``owner_id`` is unset."""

    id: int | None
    title: str
    message: str
    owner_id: int | None = None
    is_read: bool = False
    created_at: datetime | None = None

    @property
    def is_broadcast(self) -> bool:
        return self.owner_id is None

    def is_visible_to(self, user_id: int) -> bool:
        """Return ``True`` when ``user_id`` may see this notification."""

        return self.owner_id is None or self.owner_id == user_id


__all__ = ["Notification"]
