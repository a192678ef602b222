"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class UserType(str, Enum):
    """Account kinds recognised by the application."""

    ADMIN = "admin"
    USER = "user"


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    name: str
    email: str
    password: str
    type: UserType
    created_at: datetime | None = None

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.type is UserType.ADMIN
