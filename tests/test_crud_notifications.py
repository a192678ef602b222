"""Medicine and schedule use cases broadcast notifications as side effects."""

from __future__ import annotations

import pytest

from clinicdesk.application.use_cases.medicines import (
    add_medicine,
    delete_medicine,
    list_medicines,
    update_medicine,
)
from clinicdesk.application.use_cases.schedules import (
    add_schedule,
    delete_schedule,
    list_schedules,
    update_schedule,
)
from clinicdesk.domain.errors import NotFoundError, ValidationError
from clinicdesk.domain.results import OperationResult


class RecordingSender:
    def __init__(self, *, succeed: bool = True) -> None:
        self.sent: list[tuple[str, str, int | None]] = []
        self.succeed = succeed

    def send_notification(self, title, message, owner_id=None):
        self.sent.append((title, message, owner_id))
        if self.succeed:
            return OperationResult.ok(None)
        return OperationResult(success=False, error="down", error_code="store_error")


@pytest.fixture
def session(session_factory):
    with session_factory() as db:
        yield db


def test_medicine_lifecycle_notifications(session):
    sender = RecordingSender()

    medicine = add_medicine(session, name="Aspirin", quantity=40, notifier=sender)
    update_medicine(session, medicine.id, quantity=35, notifier=sender)
    update_medicine(session, medicine.id, status="low_stock", notifier=sender)
    delete_medicine(session, medicine.id, notifier=sender)

    assert sender.sent == [
        (
            "New Medicine Added",
            'A new medicine "Aspirin" has been added to the inventory.',
            None,
        ),
        (
            "Medicine Status Updated",
            'The status of medicine "Aspirin" changed from available to low_stock.',
            None,
        ),
        (
            "Medicine Removed",
            'The medicine "Aspirin" has been removed from the inventory.',
            None,
        ),
    ]
    assert list_medicines(session) == []


def test_medicines_are_listed_by_name(session):
    add_medicine(session, name="Paracetamol", quantity=5)
    add_medicine(session, name="Amoxicillin", quantity=10)

    assert [m.name for m in list_medicines(session)] == ["Amoxicillin", "Paracetamol"]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "", "quantity": 1},
        {"name": "Ibuprofen", "quantity": -1},
        {"name": "Ibuprofen", "quantity": 1, "status": "expired"},
    ],
)
def test_invalid_medicines_are_rejected_without_notifying(session, kwargs):
    sender = RecordingSender()

    with pytest.raises(ValidationError):
        add_medicine(session, notifier=sender, **kwargs)
    assert sender.sent == []


def test_failed_broadcast_does_not_fail_the_crud_call(session):
    sender = RecordingSender(succeed=False)

    medicine = add_medicine(session, name="Insulin", quantity=3, notifier=sender)

    assert medicine.id is not None
    assert len(sender.sent) == 1


def test_schedule_lifecycle_notifications(session):
    sender = RecordingSender()

    schedule = add_schedule(
        session,
        title="Cardiology",
        doctor="Dr. Rivera",
        day="Monday",
        start_time="09:00",
        end_time="12:00",
        notifier=sender,
    )
    update_schedule(session, schedule.id, end_time="13:00", notifier=sender)
    update_schedule(session, schedule.id, status="cancelled", notifier=sender)
    delete_schedule(session, schedule.id, notifier=sender)

    assert schedule.day == "monday"
    assert [title for title, _, _ in sender.sent] == [
        "New Schedule Added",
        "Schedule Status Updated",
        "Schedule Removed",
    ]
    assert sender.sent[1][1] == (
        'The status of schedule "Cardiology" changed from scheduled to cancelled.'
    )
    assert list_schedules(session) == []


@pytest.mark.parametrize(
    ("start_time", "end_time", "day"),
    [("12:00", "09:00", "monday"), ("9am", "10:00", "monday"), ("09:00", "10:00", "someday")],
)
def test_invalid_schedules_are_rejected(session, start_time, end_time, day):
    with pytest.raises(ValidationError):
        add_schedule(
            session,
            title="Dermatology",
            doctor="Dr. Chen",
            day=day,
            start_time=start_time,
            end_time=end_time,
        )


def test_unknown_ids_raise_not_found(session):
    with pytest.raises(NotFoundError):
        update_medicine(session, 12345, quantity=1)
    with pytest.raises(NotFoundError):
        delete_schedule(session, 12345)
