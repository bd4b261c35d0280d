import asyncio

import pytest

from aitutor.features.chat.service import build_chat_messages, get_chat_client
from aitutor.features.progress.store import get_chat_history, get_subject_progress
from aitutor.main import app


class FakeChatClient:
    def __init__(self, reply="A quadratic equation has degree two.", delay=0.0, error=None):
        self.reply = reply
        self.delay = delay
        self.error = error
        self.calls = []

    async def complete(self, messages):
        self.calls.append(messages)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.reply


@pytest.fixture
def fake_llm(client):
    fake = FakeChatClient()
    app.dependency_overrides[get_chat_client] = lambda: fake
    return fake


def test_chat_returns_message(client, fake_llm):
    resp = client.post(
        "/api/chat",
        json={"messages": [{"role": "user", "content": "What is a quadratic?"}], "subject": "math"},
    )

    assert resp.status_code == 200
    assert resp.json() == {"message": "A quadratic equation has degree two."}


def test_default_system_prompt_prepended(client, fake_llm):
    client.post(
        "/api/chat",
        json={
            "messages": [
                {"role": "user", "content": "hi"},
                {"role": "assistant", "content": "hello"},
                {"role": "user", "content": "explain loops"},
            ],
            "subject": "programming",
        },
    )

    sent = fake_llm.calls[0]
    assert sent[0]["role"] == "system"
    assert "Programming" in sent[0]["content"]
    assert [m["role"] for m in sent[1:]] == ["user", "assistant", "user"]
    assert sent[-1]["content"] == "explain loops"


def test_client_system_prompt_wins():
    messages = build_chat_messages(
        [{"role": "system", "content": "Be brief."}, {"role": "user", "content": "hi"}], "math"
    )
    assert messages == [{"role": "system", "content": "Be brief."}, {"role": "user", "content": "hi"}]


@pytest.mark.parametrize(
    "payload",
    [
        {"messages": [], "subject": "math"},
        {"subject": "math"},
        {"messages": "hello", "subject": "math"},
        {"messages": [{"role": "robot", "content": "x"}], "subject": "math"},
    ],
)
def test_malformed_input_is_400(client, fake_llm, payload):
    resp = client.post("/api/chat", json=payload)

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "validation_error"
    assert fake_llm.calls == []


def test_timeout_is_504(client, monkeypatch):
    from aitutor.core.config import settings

    monkeypatch.setattr(settings, "CHAT_TIMEOUT_SECONDS", 0.01)
    app.dependency_overrides[get_chat_client] = lambda: FakeChatClient(delay=1.0)

    resp = client.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}], "subject": "math"})

    assert resp.status_code == 504
    assert resp.json()["error"]["message"] == "Request timed out"


def test_upstream_error_is_500(client):
    app.dependency_overrides[get_chat_client] = lambda: FakeChatClient(error=RuntimeError("model overloaded"))

    resp = client.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}], "subject": "math"})

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"]["code"] == "upstream_error"
    assert body["error"]["message"] == "model overloaded"


def test_reply_tracks_progress_for_known_user(client, fake_llm):
    resp = client.post(
        "/api/chat",
        json={
            "messages": [{"role": "user", "content": "What is a quadratic?"}],
            "subject": "math",
            "userId": "student-1",
        },
    )
    assert resp.status_code == 200

    progress = get_subject_progress("student-1", "math")
    assert progress.completed_topics == ["algebra"]
    assert progress.messages_count == 2
    assert [m.role for m in get_chat_history("student-1", "math")] == ["user", "assistant"]


def test_anonymous_chat_records_nothing(client, fake_llm):
    client.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}], "subject": "math"})
    assert get_subject_progress("anonymous", "math") is None


def test_history_requires_auth(client):
    resp = client.get("/api/chat/history", params={"subject": "math"})
    assert resp.status_code == 401


def test_history_in_order(client, fake_llm):
    client.post(
        "/api/chat",
        json={"messages": [{"role": "user", "content": "first"}], "subject": "math", "userId": "s2"},
    )

    resp = client.get("/api/chat/history", params={"subject": "math"}, headers={"X-User-Id": "s2"})

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert [m["content"] for m in data] == ["first", "A quadratic equation has degree two."]
