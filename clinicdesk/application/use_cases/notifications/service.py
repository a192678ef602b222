"""Notification operations exposed to the presentation glue.

Every public method returns an :class:`OperationResult` envelope and never
raises past its boundary. Store failures are logged with their traceback,
expected domain failures (unknown id, no signed-in user, bad input) as
warnings.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Callable, Protocol, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clinicdesk.application.auth import AuthProvider
from clinicdesk.domain.entities import Notification
from clinicdesk.domain.errors import (
    ClinicDeskError,
    StoreError,
    UnauthenticatedError,
    ValidationError,
)
from clinicdesk.domain.results import OperationResult
from clinicdesk.infrastructure.realtime import ChangeFeed
from clinicdesk.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_TITLE_LENGTH = 120


class NotificationSender(Protocol):
    """Anything able to deliver a notification, used by CRUD side effects."""

    def send_notification(
        self, title: str, message: str, owner_id: int | None = None
    ) -> OperationResult[Notification]: ...


class NotificationService:
    """Translate envelope-style calls into :class:`NotificationRepository` work."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        auth: AuthProvider,
        *,
        feed: ChangeFeed | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._auth = auth
        self._feed = feed

    @property
    def auth(self) -> AuthProvider:
        return self._auth

    def send_notification(
        self, title: str, message: str, owner_id: int | None = None
    ) -> OperationResult[Notification]:
        """Create a notification for ``owner_id``, or a broadcast when it is ``None``."""

        def _send(repository: NotificationRepository) -> Notification:
            clean_title = _require_text(title, "title", max_length=MAX_TITLE_LENGTH)
            clean_message = _require_text(message, "message")
            return repository.create(clean_title, clean_message, owner_id)

        return self._execute("send_notification", _send)

    def send_broadcast_notification(
        self, title: str, message: str
    ) -> OperationResult[Notification]:
        return self.send_notification(title, message, None)

    def get_user_notifications(
        self, include_read: bool = False
    ) -> OperationResult[Sequence[Notification]]:
        """Return the current user's notifications, most recent first."""

        return self._execute(
            "get_user_notifications",
            lambda repository: repository.list_for_user(
                self._require_user(), include_read=include_read
            ),
        )

    def mark_notification_as_read(
        self, notification_id: int
    ) -> OperationResult[Notification]:
        return self._execute(
            "mark_notification_as_read",
            lambda repository: repository.mark_read(
                notification_id, user_id=self._require_user()
            ),
        )

    def mark_all_notifications_as_read(self) -> OperationResult[int]:
        """Mark every visible unread notification as read.

        Success reflects only the store's answer for the batch; the rows are
        not checked one by one afterwards.
        """

        return self._execute(
            "mark_all_notifications_as_read",
            lambda repository: repository.mark_all_read(self._require_user()),
        )

    def get_unread_notification_count(self) -> OperationResult[int]:
        return self._execute(
            "get_unread_notification_count",
            lambda repository: repository.count_unread(self._require_user()),
        )

    def delete_notification(self, notification_id: int) -> OperationResult[bool]:
        """Delete ``notification_id``. Data is ``False`` when nothing was removed."""

        return self._execute(
            "delete_notification",
            lambda repository: repository.delete(notification_id),
        )

    def _require_user(self) -> int:
        user_id = self._auth.current_user_id()
        if user_id is None:
            raise UnauthenticatedError()
        return user_id

    def _execute(
        self, action: str, operation: Callable[[NotificationRepository], T]
    ) -> OperationResult[T]:
        try:
            with self._session_factory() as session:
                data = operation(NotificationRepository(session, self._feed))
        except StoreError as exc:
            logger.exception("Error in %s: %s", action, exc.message)
            return OperationResult.fail(exc)
        except ClinicDeskError as exc:
            logger.warning("%s failed: %s", action, exc.message)
            return OperationResult.fail(exc)
        except SQLAlchemyError as exc:
            logger.exception("Error in %s", action)
            return OperationResult.fail(StoreError(str(exc)))
        return OperationResult.ok(data)


def _require_text(value: str | None, field: str, *, max_length: int | None = None) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"Notification {field} must not be empty")
    if max_length is not None and len(text) > max_length:
        raise ValidationError(
            f"Notification {field} must be at most {max_length} characters"
        )
    return text


__all__ = ["MAX_TITLE_LENGTH", "NotificationSender", "NotificationService"]
