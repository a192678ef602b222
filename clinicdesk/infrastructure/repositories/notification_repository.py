"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clinicdesk.domain.entities import ChangeKind, Notification
from clinicdesk.domain.errors import NotFoundError, StoreError
from clinicdesk.infrastructure.models import NotificationModel
from clinicdesk.infrastructure.realtime import ChangeFeed, change_feed as default_feed
from clinicdesk.utils import localize_stored_datetime, now_in_utc_naive_datetime

logger = logging.getLogger(__name__)

COLLECTION = "notifications"


def visible_to(user_id: int):
    """SQL predicate implementing the visibility rule for ``user_id``."""

    return or_(NotificationModel.owner_id.is_(None), NotificationModel.owner_id == user_id)


class NotificationRepository:
    """Single choke point for notification persistence and querying."""

    def __init__(self, session: Session, feed: ChangeFeed | None = None) -> None:
        self.session = session
        self.feed = feed if feed is not None else default_feed

    def create(self, title: str, message: str, owner_id: int | None = None) -> Notification:
        model = NotificationModel(
            title=title,
            message=message,
            owner_id=owner_id,
            is_read=False,
            created_at=now_in_utc_naive_datetime(),
        )
        try:
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        except SQLAlchemyError as exc:
            self._rollback()
            raise StoreError(f"Could not store notification: {exc}") from exc
        self.feed.publish(COLLECTION, ChangeKind.INSERT)
        return self._to_entity(model)

    def get(self, notification_id: int) -> Notification | None:
        try:
            model = self.session.get(NotificationModel, notification_id)
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not load notification: {exc}") from exc
        return self._to_entity(model) if model else None

    def list_for_user(self, user_id: int, *, include_read: bool = False) -> Sequence[Notification]:
        query = self.session.query(NotificationModel).filter(visible_to(user_id))
        if not include_read:
            query = query.filter(NotificationModel.is_read.is_(False))
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        try:
            models = query.all()
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not list notifications: {exc}") from exc
        return [self._to_entity(model) for model in models]

    def count_unread(self, user_id: int) -> int:
        query = (
            self.session.query(func.count(NotificationModel.id))
            .filter(visible_to(user_id))
            .filter(NotificationModel.is_read.is_(False))
        )
        try:
            return int(query.scalar() or 0)
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not count notifications: {exc}") from exc

    def mark_read(self, notification_id: int, *, user_id: int) -> Notification:
        """Flag a visible notification as read; already-read rows are left untouched."""

        try:
            model = (
                self.session.query(NotificationModel)
                .filter(NotificationModel.id == notification_id)
                .filter(visible_to(user_id))
                .one_or_none()
            )
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not load notification: {exc}") from exc

        if model is None:
            raise NotFoundError(f"Notification {notification_id} not found")
        if model.is_read:
            return self._to_entity(model)

        model.is_read = True
        try:
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        except SQLAlchemyError as exc:
            self._rollback()
            raise StoreError(f"Could not update notification: {exc}") from exc
        self.feed.publish(COLLECTION, ChangeKind.UPDATE)
        return self._to_entity(model)

    def mark_all_read(self, user_id: int) -> int:
        """Flag every unread visible notification as read in a single statement.

        Returns the affected row count reported by the store. It is not
        re-verified row by row.
        """

        try:
            affected = (
                self.session.query(NotificationModel)
                .filter(visible_to(user_id))
                .filter(NotificationModel.is_read.is_(False))
                .update({NotificationModel.is_read: True}, synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError as exc:
            self._rollback()
            raise StoreError(f"Could not update notifications: {exc}") from exc
        if affected:
            self.feed.publish(COLLECTION, ChangeKind.UPDATE)
        return int(affected or 0)

    def delete(self, notification_id: int) -> bool:
        """Remove the row regardless of ownership. Missing ids are not an error."""

        try:
            removed = (
                self.session.query(NotificationModel)
                .filter(NotificationModel.id == notification_id)
                .delete(synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError as exc:
            self._rollback()
            raise StoreError(f"Could not delete notification: {exc}") from exc
        if removed:
            self.feed.publish(COLLECTION, ChangeKind.DELETE)
        return bool(removed)

    def _rollback(self) -> None:
        try:
            self.session.rollback()
        except SQLAlchemyError:  # pragma: no cover - connection already gone
            logger.warning("Rollback failed after a notification store error", exc_info=True)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            title=model.title,
            message=model.message,
            owner_id=model.owner_id,
            is_read=bool(model.is_read),
            created_at=localize_stored_datetime(model.created_at),
        )


__all__ = ["COLLECTION", "NotificationRepository", "visible_to"]
