import pytest

from aitutor.features.profiles.service import create_user_profile
from aitutor.features.progress.store import increment_message_count
from aitutor.models.profile import UserProfile
import aitutor.workers.weekly_summary as job
from aitutor.core.errors import StoreUnavailableError


class FakeJob:
    id = "job-1"


class FakeQueue:
    created = []

    def __init__(self, name, connection=None):
        self.name = name
        self.connection = connection
        self.enqueued = []
        FakeQueue.created.append(self)

    def enqueue(self, func, **kwargs):
        self.enqueued.append((func, kwargs))
        return FakeJob()


def test_enqueue_uses_summary_queue(monkeypatch):
    FakeQueue.created = []
    monkeypatch.setattr(job, "Queue", FakeQueue)

    assert job.enqueue_weekly_summary(connection=object()) == "job-1"
    queue = FakeQueue.created[0]
    assert queue.name == "weekly-summary"
    assert queue.enqueued[0][0] is job.run_weekly_summary


def test_run_weekly_summary_sends_for_active_users():
    create_user_profile(UserProfile(uid="learner"))
    increment_message_count("learner", "math")

    assert job.run_weekly_summary() == {"success": 1, "errors": 0, "total": 1}


def test_run_weekly_summary_requires_store(unconfigured_store):

    with pytest.raises(StoreUnavailableError):
        job.run_weekly_summary()
