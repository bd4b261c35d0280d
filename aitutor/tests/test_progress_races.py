"""Two chat sessions creating the same progress record at once."""

import pytest
from sqlalchemy import create_engine, event, insert

from aitutor.core.database import create_all_tables, init_engine, progress_key, user_progress
from aitutor.features.progress.store import (
    add_completed_topics,
    get_subject_progress,
    increment_message_count,
    touch_progress,
)


@pytest.fixture
def shared_file_store(tmp_path):
    """
    A file-backed store plus a second engine standing in for another worker.
    `rival_inserts_first(values)` arms a hook that commits `values` from the
    second engine right before this process inserts the same progress row.
    """
    url = f"sqlite:///{tmp_path / 'tutor.db'}"
    engine = init_engine(url)
    create_all_tables()
    rival = create_engine(url)
    armed = {}

    def competing_insert(conn, cursor, statement, parameters, context, executemany):
        values = armed.pop("values", None)
        if values is not None and statement.startswith("INSERT INTO user_progress"):
            with rival.begin() as other:
                other.execute(insert(user_progress).values(**values))
        elif values is not None:
            armed["values"] = values

    event.listen(engine, "before_cursor_execute", competing_insert)

    def rival_inserts_first(values):
        armed["values"] = values

    yield rival_inserts_first

    event.remove(engine, "before_cursor_execute", competing_insert)
    rival.dispose()


def _rival_row(user_id, subject_id, **values):
    row = {
        "id": progress_key(user_id, subject_id),
        "user_id": user_id,
        "subject_id": subject_id,
        "messages_count": 0,
        "completed_topics": [],
        "study_minutes": 0,
    }
    row.update(values)
    return row


def test_topics_appended_when_another_session_creates_record(shared_file_store):
    shared_file_store(_rival_row("u1", "math", completed_topics=["geometry"]))

    result = add_completed_topics("u1", "math", ["algebra"])

    assert result is not None
    assert result.previous == ["geometry"]
    assert result.added == ["algebra"]
    assert get_subject_progress("u1", "math").completed_topics == ["geometry", "algebra"]


def test_touch_refreshes_record_another_session_created(shared_file_store):
    shared_file_store(_rival_row("u2", "science", messages_count=4))

    assert touch_progress("u2", "science") is True

    progress = get_subject_progress("u2", "science")
    assert progress.messages_count == 4
    assert progress.last_accessed is not None


def test_message_count_not_lost_when_another_session_creates_record(shared_file_store):
    shared_file_store(_rival_row("u3", "history", messages_count=1))

    assert increment_message_count("u3", "history") is True
    assert get_subject_progress("u3", "history").messages_count == 2
