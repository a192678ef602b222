"""Broadcast notifications emitted as side effects of inventory and schedule changes."""

from __future__ import annotations

import logging

from clinicdesk.domain.entities import Medicine, Schedule

from .service import NotificationSender

logger = logging.getLogger(__name__)


def _broadcast(sender: NotificationSender, title: str, message: str) -> None:
    result = sender.send_notification(title, message, None)
    if not result.success:
        logger.warning("Broadcast '%s' was not delivered: %s", title, result.error)


def notify_medicine_added(sender: NotificationSender, *, medicine: Medicine) -> None:
    """Tell every user that ``medicine`` joined the inventory."""

    _broadcast(
        sender,
        "New Medicine Added",
        f'A new medicine "{medicine.name}" has been added to the inventory.',
    )


def notify_medicine_updated(
    sender: NotificationSender, *, before: Medicine, after: Medicine
) -> None:
    """Broadcast a status change. Updates that keep the status are silent."""

    if before.status == after.status:
        return
    _broadcast(
        sender,
        "Medicine Status Updated",
        f'The status of medicine "{after.name}" changed from '
        f"{before.status} to {after.status}.",
    )


def notify_medicine_removed(sender: NotificationSender, *, medicine: Medicine) -> None:
    _broadcast(
        sender,
        "Medicine Removed",
        f'The medicine "{medicine.name}" has been removed from the inventory.',
    )


def notify_schedule_added(sender: NotificationSender, *, schedule: Schedule) -> None:
    _broadcast(
        sender,
        "New Schedule Added",
        f'A new schedule "{schedule.title}" has been added.',
    )


def notify_schedule_updated(
    sender: NotificationSender, *, before: Schedule, after: Schedule
) -> None:
    if before.status == after.status:
        return
    _broadcast(
        sender,
        "Schedule Status Updated",
        f'The status of schedule "{after.title}" changed from '
        f"{before.status} to {after.status}.",
    )


def notify_schedule_removed(sender: NotificationSender, *, schedule: Schedule) -> None:
    _broadcast(
        sender,
        "Schedule Removed",
        f'The schedule "{schedule.title}" has been removed.',
    )


__all__ = [
    "notify_medicine_added",
    "notify_medicine_updated",
    "notify_medicine_removed",
    "notify_schedule_added",
    "notify_schedule_updated",
    "notify_schedule_removed",
]
