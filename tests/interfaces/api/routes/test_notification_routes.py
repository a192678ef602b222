"""Integration tests for the auth, notification and inventory endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from clinicdesk.application.use_cases.users import register_user
from clinicdesk.domain.entities import UserType
from clinicdesk.infrastructure.database import (
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from clinicdesk.main import create_app

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def reset_database() -> None:
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


def _create_user(email: str, *, user_type: UserType = UserType.USER, name: str = "Test User") -> int:
    with SessionLocal() as session:
        user = register_user(
            session, name=name, email=email, password=PASSWORD, user_type=user_type
        )
        return user.id


def _login(client: TestClient, email: str) -> dict[str, str]:
    response = client.post("/auth/token", data={"username": email, "password": PASSWORD})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture()
def admin_headers(client):
    _create_user("admin@example.com", user_type=UserType.ADMIN, name="Admin")
    return _login(client, "admin@example.com")


@pytest.fixture()
def user_headers(client):
    _create_user("patient@example.com", name="Patient")
    return _login(client, "patient@example.com")


def _feed(client: TestClient, headers, **params):
    response = client.get("/notifications/", headers=headers, params=params)
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["success"] is True
    return body["data"]


def _unread(client: TestClient, headers) -> int:
    response = client.get("/notifications/unread-count", headers=headers)
    assert response.status_code == 200
    return response.json()["data"]


def test_token_carries_user_type(client, user_headers):
    response = client.post(
        "/auth/token", data={"username": "patient@example.com", "password": PASSWORD}
    )

    payload = response.json()
    assert payload["token_type"] == "bearer"
    assert payload["type"] == "user"
    assert payload["name"] == "Patient"


def test_wrong_password_is_rejected(client, user_headers):
    response = client.post(
        "/auth/token", data={"username": "patient@example.com", "password": "nope-nope"}
    )

    assert response.status_code == 401


def test_admin_token_endpoint_rejects_regular_users(client, user_headers, admin_headers):
    denied = client.post(
        "/auth/admin/token", data={"username": "patient@example.com", "password": PASSWORD}
    )
    granted = client.post(
        "/auth/admin/token", data={"username": "admin@example.com", "password": PASSWORD}
    )

    assert denied.status_code == 403
    assert denied.json()["detail"] == "Access denied. Admin privileges required."
    assert granted.status_code == 200
    assert granted.json()["type"] == "admin"


def test_register_then_read_profile(client):
    created = client.post(
        "/auth/register",
        json={"name": "New Person", "email": "new@example.com", "password": PASSWORD},
    )
    assert created.status_code == 201
    assert client.post("/auth/register", json={
        "name": "Again", "email": "new@example.com", "password": PASSWORD,
    }).status_code == 400

    me = client.get("/auth/me", headers=_login(client, "new@example.com"))

    assert me.status_code == 200
    assert me.json()["email"] == "new@example.com"
    assert me.json()["type"] == "user"


def test_profile_of_seeded_admin_serializes(client, admin_headers):
    me = client.get("/auth/me", headers=admin_headers)

    assert me.status_code == 200
    assert me.json()["email"] == "admin@example.com"
    assert me.json()["type"] == "admin"


def test_notification_endpoints_require_a_token(client):
    assert client.get("/notifications/").status_code == 401
    assert client.get("/notifications/unread-count").status_code == 401


def test_broadcast_reaches_users_and_read_state_is_tracked(client, admin_headers, user_headers):
    sent = client.post(
        "/notifications/",
        headers=admin_headers,
        json={"title": "Clinic closed", "message": "Closed on Friday"},
    )
    assert sent.status_code == 201
    notification = sent.json()["data"]
    assert notification["owner_id"] is None

    feed = _feed(client, user_headers)
    assert [item["title"] for item in feed] == ["Clinic closed"]
    assert _unread(client, user_headers) == 1

    marked = client.post(f"/notifications/{notification['id']}/read", headers=user_headers)
    assert marked.status_code == 200
    assert marked.json()["data"]["is_read"] is True

    assert _unread(client, user_headers) == 0
    assert _feed(client, user_headers) == []
    assert len(_feed(client, user_headers, include_read=True)) == 1


def test_targeted_notification_is_private(client, admin_headers, user_headers):
    other_id = _create_user("other@example.com", name="Other")
    other_headers = _login(client, "other@example.com")

    client.post(
        "/notifications/",
        headers=admin_headers,
        json={"title": "Lab results", "message": "Ready", "owner_id": other_id},
    )

    assert _unread(client, other_headers) == 1
    assert _unread(client, user_headers) == 0


def test_regular_users_cannot_send_or_delete(client, admin_headers, user_headers):
    sent = client.post(
        "/notifications/", headers=admin_headers, json={"title": "Hi", "message": "There"}
    )
    notification_id = sent.json()["data"]["id"]

    assert client.post(
        "/notifications/", headers=user_headers, json={"title": "Hi", "message": "There"}
    ).status_code == 403
    assert client.delete(f"/notifications/{notification_id}", headers=user_headers).status_code == 403


def test_unknown_notification_returns_failure_envelope(client, user_headers):
    response = client.post("/notifications/9999/read", headers=user_headers)

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"]


def test_mark_all_and_delete(client, admin_headers, user_headers):
    ids = []
    for title in ("First", "Second"):
        sent = client.post(
            "/notifications/", headers=admin_headers, json={"title": title, "message": "Body"}
        )
        ids.append(sent.json()["data"]["id"])

    marked = client.post("/notifications/read-all", headers=user_headers)
    assert marked.json() == {"success": True, "data": 2, "error": None}
    assert _unread(client, user_headers) == 0

    deleted = client.delete(f"/notifications/{ids[0]}", headers=admin_headers)
    assert deleted.json()["data"] is True
    remaining = _feed(client, user_headers, include_read=True)
    assert [item["id"] for item in remaining] == [ids[1]]


def test_medicine_changes_are_broadcast(client, admin_headers, user_headers):
    created = client.post(
        "/medicines/", headers=admin_headers, json={"name": "Aspirin", "quantity": 50}
    )
    assert created.status_code == 201
    medicine = created.json()
    assert medicine["status"] == "available"
    assert medicine["is_low_stock"] is False

    updated = client.put(
        f"/medicines/{medicine['id']}",
        headers=admin_headers,
        json={"quantity": 5, "status": "low_stock"},
    )
    assert updated.status_code == 200
    assert updated.json()["is_low_stock"] is True

    feed = _feed(client, user_headers)
    assert [item["title"] for item in feed] == ["Medicine Status Updated", "New Medicine Added"]
    assert feed[1]["message"] == 'A new medicine "Aspirin" has been added to the inventory.'
    assert feed[0]["message"] == (
        'The status of medicine "Aspirin" changed from available to low_stock.'
    )


def test_regular_users_can_read_but_not_edit_medicines(client, admin_headers, user_headers):
    client.post("/medicines/", headers=admin_headers, json={"name": "Ibuprofen", "quantity": 20})

    listed = client.get("/medicines/", headers=user_headers)

    assert [item["name"] for item in listed.json()] == ["Ibuprofen"]
    assert client.post(
        "/medicines/", headers=user_headers, json={"name": "Other", "quantity": 1}
    ).status_code == 403
    assert client.get("/medicines/9999", headers=user_headers).status_code == 404


def test_schedule_lifecycle(client, admin_headers, user_headers):
    invalid = client.post(
        "/schedules/",
        headers=admin_headers,
        json={
            "title": "Cardiology",
            "doctor": "Dr. Silva",
            "day": "Monday",
            "start_time": "11:00",
            "end_time": "09:00",
        },
    )
    assert invalid.status_code == 400

    created = client.post(
        "/schedules/",
        headers=admin_headers,
        json={
            "title": "Cardiology",
            "doctor": "Dr. Silva",
            "day": "Monday",
            "start_time": "09:00",
            "end_time": "11:00",
        },
    )
    assert created.status_code == 201
    assert created.json()["day"] == "monday"

    removed = client.delete(f"/schedules/{created.json()['id']}", headers=admin_headers)
    assert removed.status_code == 204

    titles = [item["title"] for item in _feed(client, user_headers)]
    assert titles == ["Schedule Removed", "New Schedule Added"]
