"""Tests for the envelope-returning notification service."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from clinicdesk.application.auth import RequestAuthContext
from clinicdesk.application.use_cases.notifications import NotificationService


def test_broadcast_medicine_scenario(service_for, make_user):
    user = make_user()
    service = service_for(user)
    before = service.get_unread_notification_count().data
    title = "New Medicine Added"
    message = 'A new medicine "Aspirin" has been added to the inventory.'

    sent = service.send_notification(title, message, None)
    listing = service.get_user_notifications(include_read=True)

    assert sent.success is True
    assert any(
        n.title == title and n.message == message and n.is_read is False
        for n in listing.data
    )
    assert service.get_unread_notification_count().data == before + 1


def test_targeted_notification_only_counts_for_its_owner(service_for, make_user):
    alice = make_user("Alice")
    bob = make_user("Bob")
    alice_service = service_for(alice)
    bob_service = service_for(bob)
    alice_before = alice_service.get_unread_notification_count().data
    bob_before = bob_service.get_unread_notification_count().data

    result = service_for(None).send_notification("Lab results", "Ready", alice.id)

    assert result.success is True
    assert alice_service.get_unread_notification_count().data == alice_before + 1
    assert bob_service.get_unread_notification_count().data == bob_before


@pytest.mark.parametrize(
    "operation",
    [
        lambda service: service.get_user_notifications(True),
        lambda service: service.mark_notification_as_read(1),
        lambda service: service.mark_all_notifications_as_read(),
        lambda service: service.get_unread_notification_count(),
    ],
)
def test_per_user_operations_require_a_current_user(service_for, operation):
    result = operation(service_for(None))

    assert result.success is False
    assert result.error_code == "unauthenticated"


@pytest.mark.parametrize(
    ("title", "message"),
    [("", "body"), ("   ", "body"), ("Title", ""), ("x" * 121, "body")],
)
def test_send_rejects_malformed_input(service_for, title, message):
    result = service_for(None).send_notification(title, message)

    assert result.success is False
    assert result.error_code == "validation_error"


def test_mark_read_is_idempotent_and_reports_missing_ids(service_for, make_user):
    user = make_user()
    service = service_for(user)
    sent = service.send_notification("Reminder", "Check-up tomorrow", user.id).data

    first = service.mark_notification_as_read(sent.id)
    second = service.mark_notification_as_read(sent.id)
    missing = service.mark_notification_as_read(424242)

    assert first.success and second.success
    assert second.data.is_read is True
    assert missing.success is False
    assert missing.error_code == "not_found"
    assert sent.id not in {n.id for n in service.get_user_notifications(False).data}


def test_mark_all_then_count_is_zero(service_for, make_user):
    user = make_user()
    service = service_for(user)
    service.send_broadcast_notification("One", "1")
    service.send_notification("Two", "2", user.id)

    result = service.mark_all_notifications_as_read()

    assert result.success is True
    assert result.data == 2
    assert service.get_unread_notification_count().data == 0


def test_delete_nonexistent_id_succeeds(service_for, make_user):
    service = service_for(make_user())
    sent = service.send_broadcast_notification("Bye", "Soon gone").data

    assert service.delete_notification(sent.id).as_dict() == {"success": True, "data": True}
    assert service.delete_notification(sent.id).as_dict() == {"success": True, "data": False}


def test_store_errors_become_failed_envelopes(session_factory, make_user, feed):
    user = make_user()

    def broken_factory():
        session = session_factory()

        def _fail(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("connection lost"))

        session.query = _fail
        return session

    service = NotificationService(broken_factory, RequestAuthContext(user), feed=feed)
    result = service.get_unread_notification_count()

    assert result.success is False
    assert result.error_code == "store_error"
    assert result.as_dict()["success"] is False
