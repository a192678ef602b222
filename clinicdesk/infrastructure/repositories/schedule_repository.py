"""Persistence helpers for doctor schedules."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clinicdesk.domain.entities import ChangeKind, Schedule
from clinicdesk.domain.errors import NotFoundError, StoreError
from clinicdesk.infrastructure.models import ScheduleModel
from clinicdesk.infrastructure.realtime import ChangeFeed, change_feed as default_feed
from clinicdesk.utils import localize_stored_datetime

COLLECTION = "schedules"


class ScheduleRepository:
    """Provide CRUD operations for :class:`Schedule` objects."""

    def __init__(self, session: Session, feed: ChangeFeed | None = None) -> None:
        self.session = session
        self.feed = feed if feed is not None else default_feed

    def list(self) -> Sequence[Schedule]:
        query = self.session.query(ScheduleModel).order_by(
            ScheduleModel.title.asc(), ScheduleModel.id.asc()
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, schedule_id: int) -> Schedule | None:
        model = self.session.get(ScheduleModel, schedule_id)
        return self._to_entity(model) if model else None

    def create(self, schedule: Schedule) -> Schedule:
        model = ScheduleModel()
        self._apply_entity_to_model(model, schedule)
        self._commit(model)
        self.feed.publish(COLLECTION, ChangeKind.INSERT)
        return self._to_entity(model)

    def update(self, schedule: Schedule) -> Schedule:
        model = self.session.get(ScheduleModel, schedule.id)
        if model is None:
            raise NotFoundError(f"Schedule {schedule.id} not found")
        self._apply_entity_to_model(model, schedule)
        self._commit(model)
        self.feed.publish(COLLECTION, ChangeKind.UPDATE)
        return self._to_entity(model)

    def delete(self, schedule_id: int) -> None:
        model = self.session.get(ScheduleModel, schedule_id)
        if model is None:
            raise NotFoundError(f"Schedule {schedule_id} not found")
        try:
            self.session.delete(model)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError(f"Could not delete schedule: {exc}") from exc
        self.feed.publish(COLLECTION, ChangeKind.DELETE)

    def _commit(self, model: ScheduleModel) -> None:
        try:
            self.session.add(model)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError(f"Could not store schedule: {exc}") from exc
        self.session.refresh(model)

    @staticmethod
    def _apply_entity_to_model(model: ScheduleModel, schedule: Schedule) -> None:
        model.title = schedule.title
        model.doctor = schedule.doctor
        model.day = schedule.day
        model.start_time = schedule.start_time
        model.end_time = schedule.end_time
        model.status = schedule.status

    @staticmethod
    def _to_entity(model: ScheduleModel) -> Schedule:
        return Schedule(
            id=model.id,
            title=model.title,
            doctor=model.doctor,
            day=model.day,
            start_time=model.start_time,
            end_time=model.end_time,
            status=model.status,
            created_at=localize_stored_datetime(model.created_at),
            updated_at=localize_stored_datetime(model.updated_at),
        )


__all__ = ["ScheduleRepository"]
