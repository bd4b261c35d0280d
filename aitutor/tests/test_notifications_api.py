import pytest

from aitutor.core.auth import create_id_token
from aitutor.core.config import settings
from aitutor.features.notifications.store import create_notification, get_user_notifications
from aitutor.features.profiles.service import create_user_profile
from aitutor.features.progress.store import increment_message_count
from aitutor.models.profile import UserProfile


@pytest.fixture
def jwt_secret(monkeypatch):
    monkeypatch.setattr(settings, "AUTH_JWT_SECRET", "test-secret-for-id-token-signing-0123")
    monkeypatch.setattr(settings, "AUTH_JWT_ISSUER", None)
    monkeypatch.setattr(settings, "AUTH_JWT_AUDIENCE", None)
    return "test-secret-for-id-token-signing-0123"


def test_unauthenticated_gets_mock_data(client):
    resp = client.get("/api/notifications", params={"limit": 3})

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["isMockData"] is True
    assert len(body["data"]) == 3
    assert all(n["id"].startswith("mock-notification-") for n in body["data"])


def test_mock_list_is_stable_across_requests(client):
    first = client.get("/api/notifications").json()["data"]
    second = client.get("/api/notifications").json()["data"]
    assert first == second


def test_mock_mark_read_persists_for_session(client):
    target = client.get("/api/notifications").json()["data"][0]["id"]

    resp = client.post("/api/notifications", json={"id": target})
    assert resp.json() == {"success": True, "mock": True}

    again = {n["id"]: n["isRead"] for n in client.get("/api/notifications").json()["data"]}
    assert again[target] is True


def test_mock_mark_all_read(client):
    client.post("/api/notifications/mark-all-read")
    assert all(n["isRead"] for n in client.get("/api/notifications").json()["data"])


def test_unconfigured_store_serves_mock_even_when_authenticated(client, unconfigured_store):
    resp = client.get("/api/notifications", headers={"X-User-Id": "u1"})

    assert resp.json()["isMockData"] is True
    assert all(n["userId"] == "u1" for n in resp.json()["data"])


def test_authenticated_reads_real_notifications(client):
    create_notification("u1", "Topic Completed!", "msg", "milestone", link="/subjects/math")

    resp = client.get("/api/notifications", headers={"X-User-Id": "u1"})

    body = resp.json()
    assert body["isMockData"] is False
    assert [n["title"] for n in body["data"]] == ["Topic Completed!"]
    assert body["data"][0]["link"] == "/subjects/math"
    assert body["data"][0]["isRead"] is False


def test_bearer_id_token_authenticates(client, jwt_secret):
    create_notification("jwt-user", "Hello", "msg", "system")
    token = create_id_token("jwt-user")

    resp = client.get("/api/notifications", headers={"Authorization": f"Bearer {token}"})

    assert resp.json()["isMockData"] is False
    assert resp.json()["data"][0]["title"] == "Hello"


def test_authenticated_mark_read_and_mark_all(client):
    first = create_notification("u2", "a", "m", "system")
    create_notification("u2", "b", "m", "system")
    headers = {"X-User-Id": "u2"}

    assert client.post("/api/notifications", json={"id": first}, headers=headers).json() == {"success": True}
    assert client.post(f"/api/notifications/{first}/read", headers=headers).json() == {"success": True}
    assert client.post("/api/notifications", json={"markAllRead": True}, headers=headers).json() == {"success": True}
    assert all(n.is_read for n in get_user_notifications("u2"))


def test_cannot_mark_someone_elses_notification(client):
    notification_id = create_notification("owner", "a", "m", "system")

    resp = client.post("/api/notifications", json={"id": notification_id}, headers={"X-User-Id": "intruder"})

    assert resp.json() == {"success": False}
    assert get_user_notifications("owner")[0].is_read is False


def test_post_without_id_or_flag_is_400(client):
    resp = client.post("/api/notifications", json={})
    assert resp.status_code == 400


def test_weekly_summary_requires_bearer(client):
    resp = client.post("/api/notifications/send-weekly-summary")
    assert resp.status_code == 401


def test_weekly_summary_rejects_bad_token(client, monkeypatch):
    monkeypatch.setattr(settings, "NOTIFICATIONS_API_KEY", "service-secret")
    resp = client.post("/api/notifications/send-weekly-summary", headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401


def test_weekly_summary_with_service_secret(client, monkeypatch):
    monkeypatch.setattr(settings, "NOTIFICATIONS_API_KEY", "service-secret")
    create_user_profile(UserProfile(uid="learner"))
    increment_message_count("learner", "math")

    resp = client.post(
        "/api/notifications/send-weekly-summary", headers={"Authorization": "Bearer service-secret"}
    )

    assert resp.status_code == 200
    assert resp.json()["stats"] == {"success": 1, "errors": 0, "total": 1}
    assert get_user_notifications("learner")[0].type == "summary"


def test_weekly_summary_with_id_token(client, jwt_secret):
    token = create_id_token("admin-user")
    resp = client.post("/api/notifications/send-weekly-summary", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 200
    assert resp.json()["message"] == "No users found for weekly summary"


def test_weekly_summary_unconfigured_store_is_500(client, monkeypatch, unconfigured_store):
    monkeypatch.setattr(settings, "NOTIFICATIONS_API_KEY", "service-secret")
    resp = client.post(
        "/api/notifications/send-weekly-summary", headers={"Authorization": "Bearer service-secret"}
    )
    assert resp.status_code == 500
