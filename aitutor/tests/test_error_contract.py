"""Tests for normalized error responses."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from aitutor.core.errors import AppError, NotFoundError, UpstreamTimeoutError, app_error_handler
from aitutor.core.middleware.request_id import RequestIdMiddleware


def test_validation_error_has_standard_shape(client):
    resp = client.get("/api/recommendations", params={"limit": "many"}, headers={"X-User-Id": "u1"})
    assert resp.status_code == 400
    body = resp.json()
    rid = resp.headers.get("x-request-id")
    assert body["error"]["code"] == "validation_error"
    assert body["error"]["request_id"] == rid
    assert body["detail"] == body["error"]["message"]


def test_unauthorized_normalized(client):
    resp = client.get("/api/streaks/current")
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "unauthorized"


def test_unknown_route_normalized(client):
    resp = client.get("/api/does-not-exist")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "not_found"
    assert resp.json()["error"]["request_id"] == resp.headers.get("x-request-id")


def test_app_error_subclasses_carry_status():
    test_app = FastAPI()
    test_app.add_middleware(RequestIdMiddleware)
    test_app.add_exception_handler(AppError, app_error_handler)

    @test_app.get("/missing")
    async def missing():
        raise NotFoundError("Nothing here")

    @test_app.get("/slow")
    async def slow():
        raise UpstreamTimeoutError("Request timed out")

    client = TestClient(test_app)

    missing_resp = client.get("/missing", headers={"X-Request-Id": "rid-1"})
    assert missing_resp.status_code == 404
    assert missing_resp.json()["error"] == {"code": "not_found", "message": "Nothing here", "request_id": "rid-1"}

    slow_resp = client.get("/slow")
    assert slow_resp.status_code == 504
    assert slow_resp.json()["error"]["code"] == "upstream_timeout"
