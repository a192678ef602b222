"""Tests for the interactive auth session and sign-in use case."""

from __future__ import annotations

import pytest

from clinicdesk.application.auth import AuthEvent, AuthSession
from clinicdesk.application.use_cases.users import AuthenticationStatus, register_user
from clinicdesk.domain.entities import UserType
from clinicdesk.domain.errors import ValidationError


def test_sign_in_sets_current_user_and_notifies_listeners(session_factory, make_user):
    user = make_user("Nora", password="secret1")
    auth = AuthSession(session_factory)
    events = []
    auth.on_auth_state_change(lambda event, current: events.append((event, current)))

    status = auth.sign_in(user.email, "secret1")

    assert status is AuthenticationStatus.SUCCESS
    assert auth.current_user_id() == user.id
    assert auth.current_user_role() is UserType.USER
    assert events == [(AuthEvent.SIGNED_IN, auth.user)]


def test_wrong_password_keeps_session_anonymous(session_factory, make_user):
    user = make_user("Omar", password="secret1")
    auth = AuthSession(session_factory)

    status = auth.sign_in(user.email, "wrong-password")

    assert status is AuthenticationStatus.INVALID_CREDENTIALS
    assert auth.current_user_id() is None


def test_admin_sign_in_rejects_regular_users(session_factory, make_user):
    user = make_user("Pia", password="secret1")
    admin = make_user("Root", user_type=UserType.ADMIN, password="secret1")
    auth = AuthSession(session_factory)

    assert auth.sign_in(user.email, "secret1", require_admin=True) is AuthenticationStatus.NOT_ADMIN
    assert auth.current_user_id() is None
    assert auth.sign_in(admin.email, "secret1", require_admin=True) is AuthenticationStatus.SUCCESS
    assert auth.current_user_role() is UserType.ADMIN


def test_sign_up_then_sign_out(session_factory):
    auth = AuthSession(session_factory)
    events = []
    unsubscribe = auth.on_auth_state_change(lambda event, current: events.append(event))

    user = auth.sign_up("Quinn", "Quinn@Example.com", "secret1")
    auth.sign_out()
    unsubscribe()
    auth.sign_in("quinn@example.com", "secret1")

    assert user.email == "quinn@example.com"
    assert user.type is UserType.USER
    assert events == [AuthEvent.SIGNED_IN, AuthEvent.SIGNED_OUT]


def test_register_rejects_duplicate_email(session_factory):
    with session_factory() as session:
        register_user(session, name="Rae", email="rae@example.com", password="secret1")
        with pytest.raises(ValidationError):
            register_user(session, name="Rae 2", email="RAE@example.com", password="secret1")


@pytest.mark.parametrize(
    "email",
    ["not-an-email", "two@@example.com", "nurse@clinic.test", "admin@localhost"],
)
def test_register_rejects_addresses_the_api_cannot_serialize(session_factory, email):
    with session_factory() as session:
        with pytest.raises(ValidationError):
            register_user(session, name="Sam", email=email, password="secret1")


def test_register_normalizes_email(session_factory):
    with session_factory() as session:
        user = register_user(session, name="Tess", email="  Tess@Example.COM ", password="secret1")

    assert user.email == "tess@example.com"
