"""Use cases for managing doctor schedules."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import replace

from sqlalchemy.orm import Session

from clinicdesk.application.use_cases.notifications import (
    NotificationSender,
    notify_schedule_added,
    notify_schedule_removed,
    notify_schedule_updated,
)
from clinicdesk.domain.entities import SCHEDULE_STATUSES, WEEKDAYS, Schedule
from clinicdesk.domain.errors import NotFoundError, ValidationError
from clinicdesk.infrastructure.repositories import ScheduleRepository

_TIME_PATTERN = re.compile(r"^(?:[01]\d|2[0-3]):[0-5]\d$")


def _validate(schedule: Schedule) -> Schedule:
    title = (schedule.title or "").strip()
    doctor = (schedule.doctor or "").strip()
    day = (schedule.day or "").strip().lower()
    if not title:
        raise ValidationError("Schedule title is required")
    if not doctor:
        raise ValidationError("Schedule doctor is required")
    if day not in WEEKDAYS:
        raise ValidationError(f"Unknown weekday '{schedule.day}'")
    for label, value in (("start", schedule.start_time), ("end", schedule.end_time)):
        if not _TIME_PATTERN.match(value or ""):
            raise ValidationError(f"Schedule {label} time must use the HH:MM format")
    # zero-padded HH:MM strings compare in chronological order
    if schedule.start_time >= schedule.end_time:
        raise ValidationError("Schedule start time must be before its end time")
    if schedule.status not in SCHEDULE_STATUSES:
        allowed = ", ".join(SCHEDULE_STATUSES)
        raise ValidationError(f"Schedule status must be one of: {allowed}")
    return replace(schedule, title=title, doctor=doctor, day=day)


def list_schedules(session: Session) -> Sequence[Schedule]:
    """Return every schedule ordered by title."""

    return ScheduleRepository(session).list()


def get_schedule(session: Session, schedule_id: int) -> Schedule:
    schedule = ScheduleRepository(session).get(schedule_id)
    if schedule is None:
        raise NotFoundError(f"Schedule {schedule_id} not found")
    return schedule


def add_schedule(
    session: Session,
    *,
    title: str,
    doctor: str,
    day: str,
    start_time: str,
    end_time: str,
    status: str = "scheduled",
    notifier: NotificationSender | None = None,
) -> Schedule:
    """Store a new schedule and broadcast it."""

    schedule = _validate(
        Schedule(
            id=None,
            title=title,
            doctor=doctor,
            day=day,
            start_time=start_time,
            end_time=end_time,
            status=status,
        )
    )
    saved = ScheduleRepository(session).create(schedule)
    if notifier is not None:
        notify_schedule_added(notifier, schedule=saved)
    return saved


def update_schedule(
    session: Session,
    schedule_id: int,
    *,
    title: str | None = None,
    doctor: str | None = None,
    day: str | None = None,
    start_time: str | None = None,
    end_time: str | None = None,
    status: str | None = None,
    notifier: NotificationSender | None = None,
) -> Schedule:
    repository = ScheduleRepository(session)
    original = repository.get(schedule_id)
    if original is None:
        raise NotFoundError(f"Schedule {schedule_id} not found")

    changed = _validate(
        replace(
            original,
            title=original.title if title is None else title,
            doctor=original.doctor if doctor is None else doctor,
            day=original.day if day is None else day,
            start_time=original.start_time if start_time is None else start_time,
            end_time=original.end_time if end_time is None else end_time,
            status=original.status if status is None else status,
        )
    )
    updated = repository.update(changed)
    if notifier is not None:
        notify_schedule_updated(notifier, before=original, after=updated)
    return updated


def delete_schedule(
    session: Session, schedule_id: int, *, notifier: NotificationSender | None = None
) -> None:
    repository = ScheduleRepository(session)
    schedule = repository.get(schedule_id)
    if schedule is None:
        raise NotFoundError(f"Schedule {schedule_id} not found")
    repository.delete(schedule_id)
    if notifier is not None:
        notify_schedule_removed(notifier, schedule=schedule)


__all__ = [
    "add_schedule",
    "delete_schedule",
    "get_schedule",
    "list_schedules",
    "update_schedule",
]
