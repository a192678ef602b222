"""Use cases for managing the medicines inventory."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from sqlalchemy.orm import Session

from clinicdesk.application.use_cases.notifications import (
    NotificationSender,
    notify_medicine_added,
    notify_medicine_removed,
    notify_medicine_updated,
)
from clinicdesk.domain.entities import MEDICINE_STATUSES, Medicine
from clinicdesk.domain.errors import NotFoundError, ValidationError
from clinicdesk.infrastructure.repositories import MedicineRepository


def _validate(medicine: Medicine) -> Medicine:
    name = (medicine.name or "").strip()
    if not name:
        raise ValidationError("Medicine name is required")
    if medicine.quantity is None or medicine.quantity < 0:
        raise ValidationError("Medicine quantity must be zero or greater")
    if medicine.status not in MEDICINE_STATUSES:
        allowed = ", ".join(MEDICINE_STATUSES)
        raise ValidationError(f"Medicine status must be one of: {allowed}")
    description = (medicine.description or "").strip() or None
    return replace(medicine, name=name, description=description)


def list_medicines(session: Session) -> Sequence[Medicine]:
    """Return every medicine ordered by name."""

    return MedicineRepository(session).list()


def get_medicine(session: Session, medicine_id: int) -> Medicine:
    medicine = MedicineRepository(session).get(medicine_id)
    if medicine is None:
        raise NotFoundError(f"Medicine {medicine_id} not found")
    return medicine


def add_medicine(
    session: Session,
    *,
    name: str,
    quantity: int,
    status: str = "available",
    description: str | None = None,
    notifier: NotificationSender | None = None,
) -> Medicine:
    """Store a new medicine and broadcast its arrival."""

    medicine = _validate(
        Medicine(id=None, name=name, quantity=quantity, status=status, description=description)
    )
    saved = MedicineRepository(session).create(medicine)
    if notifier is not None:
        notify_medicine_added(notifier, medicine=saved)
    return saved


def update_medicine(
    session: Session,
    medicine_id: int,
    *,
    name: str | None = None,
    quantity: int | None = None,
    status: str | None = None,
    description: str | None = None,
    notifier: NotificationSender | None = None,
) -> Medicine:
    """Apply the provided changes; a status change is broadcast."""

    repository = MedicineRepository(session)
    original = repository.get(medicine_id)
    if original is None:
        raise NotFoundError(f"Medicine {medicine_id} not found")

    changed = _validate(
        replace(
            original,
            name=original.name if name is None else name,
            quantity=original.quantity if quantity is None else quantity,
            status=original.status if status is None else status,
            description=original.description if description is None else description,
        )
    )
    updated = repository.update(changed)
    if notifier is not None:
        notify_medicine_updated(notifier, before=original, after=updated)
    return updated


def delete_medicine(
    session: Session, medicine_id: int, *, notifier: NotificationSender | None = None
) -> None:
    repository = MedicineRepository(session)
    medicine = repository.get(medicine_id)
    if medicine is None:
        raise NotFoundError(f"Medicine {medicine_id} not found")
    repository.delete(medicine_id)
    if notifier is not None:
        notify_medicine_removed(notifier, medicine=medicine)


__all__ = [
    "add_medicine",
    "delete_medicine",
    "get_medicine",
    "list_medicines",
    "update_medicine",
]
