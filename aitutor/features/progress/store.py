"""
Progress store accessor.

One record per (user, subject), keyed "{userId}_{subjectId}". Created on the
first interaction with a subject; mutated on every chat message and topic
completion. Message counts are incremented in SQL and topic appends run under
a row lock, so concurrent chat sessions do not lose updates.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from sqlalchemy import select, insert, update
from sqlalchemy.exc import IntegrityError

from aitutor.core.database import get_db_session, user_progress, chat_messages, progress_key
from aitutor.models.progress import ChatMessage, ChatRole, TopicUpdate, UserProgress, as_utc

logger = logging.getLogger("aitutor")


def _row_to_progress(row) -> UserProgress:
    return UserProgress(
        user_id=row.user_id,
        subject_id=row.subject_id,
        last_accessed=as_utc(row.last_accessed),
        messages_count=row.messages_count or 0,
        completed_topics=list(row.completed_topics or []),
        score=row.score,
        study_minutes=row.study_minutes or 0,
    )


def _new_record(user_id: str, subject_id: str, now: datetime, **values) -> dict:
    record = {
        "id": progress_key(user_id, subject_id),
        "user_id": user_id,
        "subject_id": subject_id,
        "last_accessed": now,
        "messages_count": 0,
        "completed_topics": [],
        "study_minutes": 0,
        "created_at": now,
        "last_updated": now,
    }
    record.update(values)
    return record


def get_user_progress(user_id: str) -> List[UserProgress]:
    """All progress records for a user, most recently accessed first."""
    try:
        with get_db_session() as session:
            rows = session.execute(
                select(user_progress)
                .where(user_progress.c.user_id == user_id)
                .order_by(user_progress.c.last_accessed.desc(), user_progress.c.subject_id)
            ).all()
            return [_row_to_progress(row) for row in rows]
    except Exception as e:
        logger.error(f"[progress] error getting progress for {user_id}: {e}")
        return []


def get_subject_progress(user_id: str, subject_id: str) -> Optional[UserProgress]:
    try:
        with get_db_session() as session:
            row = session.execute(
                select(user_progress).where(user_progress.c.id == progress_key(user_id, subject_id))
            ).first()
            return _row_to_progress(row) if row else None
    except Exception as e:
        logger.error(f"[progress] error getting {subject_id} progress for {user_id}: {e}")
        return None


def list_progress_accessed_since(since: datetime) -> List[UserProgress]:
    """Progress records touched at or after `since`. Raises on store errors."""
    with get_db_session() as session:
        rows = session.execute(
            select(user_progress)
            .where(user_progress.c.last_accessed >= since)
            .order_by(user_progress.c.user_id, user_progress.c.subject_id)
        ).all()
        return [_row_to_progress(row) for row in rows]


def touch_progress(user_id: str, subject_id: str, now: Optional[datetime] = None) -> bool:
    """Create the record on first interaction, otherwise refresh last_accessed."""
    now = now or datetime.now(timezone.utc)
    key = progress_key(user_id, subject_id)
    stmt = update(user_progress).where(user_progress.c.id == key).values(last_accessed=now)
    try:
        with get_db_session() as session:
            if session.execute(stmt).rowcount:
                return True
        try:
            with get_db_session() as session:
                session.execute(insert(user_progress).values(**_new_record(user_id, subject_id, now)))
            return True
        except IntegrityError:
            # Another session created the record first
            with get_db_session() as session:
                return session.execute(stmt).rowcount > 0
    except Exception as e:
        logger.error(f"[progress] error touching {key}: {e}")
        return False


def increment_message_count(user_id: str, subject_id: str, now: Optional[datetime] = None) -> bool:
    now = now or datetime.now(timezone.utc)
    key = progress_key(user_id, subject_id)
    stmt = (
        update(user_progress)
        .where(user_progress.c.id == key)
        .values(
            messages_count=user_progress.c.messages_count + 1,
            last_accessed=now,
            last_updated=now,
        )
    )
    try:
        with get_db_session() as session:
            if session.execute(stmt).rowcount:
                return True
        try:
            with get_db_session() as session:
                session.execute(
                    insert(user_progress).values(**_new_record(user_id, subject_id, now, messages_count=1))
                )
            return True
        except IntegrityError:
            # Another session created the record first
            with get_db_session() as session:
                return session.execute(stmt).rowcount > 0
    except Exception as e:
        logger.error(f"[progress] error incrementing message count for {key}: {e}")
        return False


def _append_topics(user_id: str, subject_id: str, requested: List[str], now: datetime) -> TopicUpdate:
    key = progress_key(user_id, subject_id)
    with get_db_session() as session:
        row = session.execute(
            select(user_progress.c.completed_topics)
            .where(user_progress.c.id == key)
            .with_for_update()
        ).first()

        if row is None:
            session.execute(
                insert(user_progress).values(
                    **_new_record(user_id, subject_id, now, completed_topics=requested)
                )
            )
            return TopicUpdate(previous=[], added=requested)

        previous = list(row.completed_topics or [])
        added = [topic for topic in requested if topic not in previous]
        if added:
            session.execute(
                update(user_progress)
                .where(user_progress.c.id == key)
                .values(completed_topics=previous + added, last_updated=now)
            )
        return TopicUpdate(previous=previous, added=added)


def add_completed_topics(
    user_id: str,
    subject_id: str,
    topics: Iterable[str],
    now: Optional[datetime] = None,
) -> Optional[TopicUpdate]:
    """
    Append topics not yet completed. Returns the prior list and what was
    added, or None if the store failed.
    """
    now = now or datetime.now(timezone.utc)
    key = progress_key(user_id, subject_id)
    requested = list(dict.fromkeys(topics))
    try:
        try:
            return _append_topics(user_id, subject_id, requested, now)
        except IntegrityError:
            # Another session created the record first; the row exists now, so lock and append
            return _append_topics(user_id, subject_id, requested, now)
    except Exception as e:
        logger.error(f"[progress] error updating completed topics for {key}: {e}")
        return None


def save_chat_message(
    user_id: str,
    subject_id: str,
    role: ChatRole,
    content: str,
    now: Optional[datetime] = None,
) -> Optional[int]:
    """Store one chat message and count it against the subject's progress."""
    now = now or datetime.now(timezone.utc)
    try:
        with get_db_session() as session:
            result = session.execute(
                insert(chat_messages).values(
                    user_id=user_id,
                    subject_id=subject_id,
                    role=role,
                    content=content,
                    timestamp=now,
                )
            )
            message_id = result.inserted_primary_key[0]
    except Exception as e:
        logger.error(f"[progress] error saving chat message for {user_id}/{subject_id}: {e}")
        return None

    increment_message_count(user_id, subject_id, now=now)
    return message_id


def get_chat_history(user_id: str, subject_id: str) -> List[ChatMessage]:
    try:
        with get_db_session() as session:
            rows = session.execute(
                select(chat_messages)
                .where(chat_messages.c.user_id == user_id, chat_messages.c.subject_id == subject_id)
                .order_by(chat_messages.c.timestamp.asc(), chat_messages.c.id.asc())
            ).all()
            return [
                ChatMessage(
                    id=row.id,
                    user_id=row.user_id,
                    subject_id=row.subject_id,
                    role=row.role,
                    content=row.content,
                    timestamp=as_utc(row.timestamp),
                )
                for row in rows
            ]
    except Exception as e:
        logger.error(f"[progress] error getting chat history for {user_id}/{subject_id}: {e}")
        return []
