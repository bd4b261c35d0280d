# aitutor/conftest.py
import os

os.environ.setdefault("SKIP_ENV_VALIDATION", "1")
os.environ.setdefault("ENV", "test")

import pytest  # noqa: E402

from aitutor.core.database import create_all_tables, dispose_engine, init_engine  # noqa: E402


@pytest.fixture(scope="function", autouse=True)
def sqlite_store():
    """
    Fresh in-memory store for every test.

    StaticPool keeps the single connection alive, so the in-memory database
    survives across sessions until the engine is disposed.
    """
    engine = init_engine("sqlite://")
    create_all_tables()
    yield engine
    dispose_engine()


@pytest.fixture(scope="function", autouse=True)
def reset_mock_notifications():
    from aitutor.api.notifications import mock_store

    mock_store.reset()
    yield
    mock_store.reset()


@pytest.fixture
def unconfigured_store(monkeypatch):
    """Store reads as unconfigured: no engine, no DATABASE_URL, no TEST_DATABASE_URL."""
    from aitutor.core.config import settings

    dispose_engine()
    monkeypatch.setattr(settings, "DATABASE_URL", None)
    monkeypatch.delenv("TEST_DATABASE_URL", raising=False)
    yield


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from aitutor.main import app

    app.dependency_overrides.clear()
    yield TestClient(app)
    app.dependency_overrides.clear()
