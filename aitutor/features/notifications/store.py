"""
Notification persistence.

Notifications are created by server-side triggers and only ever mutated by
"mark read". Store errors are logged and degrade to None/[]/False.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from sqlalchemy import select, insert, update

from aitutor.core.database import get_db_session, notifications, user_profiles
from aitutor.models.notification import Notification, NotificationType
from aitutor.models.progress import as_utc

logger = logging.getLogger("aitutor")


def _row_to_notification(row) -> Notification:
    return Notification(
        id=row.id,
        user_id=row.user_id,
        title=row.title,
        message=row.message,
        type=row.type,
        is_read=bool(row.is_read),
        created_at=as_utc(row.created_at),
        link=row.link,
    )


def create_notification(
    user_id: str,
    title: str,
    message: str,
    type: NotificationType,
    link: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Optional[str]:
    """Create an unread notification unless the user opted out of in-app notifications."""
    try:
        with get_db_session() as session:
            opted_in = session.execute(
                select(user_profiles.c.notifications_enabled).where(user_profiles.c.uid == user_id)
            ).scalar_one_or_none()
            if opted_in is not None and not opted_in:
                logger.info(f"[notifications] {user_id} opted out, skipping '{title}'")
                return None

            notification_id = uuid4().hex
            session.execute(
                insert(notifications).values(
                    id=notification_id,
                    user_id=user_id,
                    title=title,
                    message=message,
                    type=type,
                    is_read=False,
                    created_at=now or datetime.now(timezone.utc),
                    link=link,
                )
            )
        return notification_id
    except Exception as e:
        logger.error(f"[notifications] error creating notification for {user_id}: {e}")
        return None


def get_user_notifications(user_id: str, limit: int = 20) -> List[Notification]:
    try:
        with get_db_session() as session:
            rows = session.execute(
                select(notifications)
                .where(notifications.c.user_id == user_id)
                .order_by(notifications.c.created_at.desc(), notifications.c.id)
                .limit(limit)
            ).all()
            return [_row_to_notification(row) for row in rows]
    except Exception as e:
        logger.error(f"[notifications] error listing notifications for {user_id}: {e}")
        return []


def mark_notification_as_read(notification_id: str, user_id: Optional[str] = None) -> bool:
    """Mark one notification read; scoped to user_id when given. False if nothing matched."""
    try:
        with get_db_session() as session:
            stmt = update(notifications).where(notifications.c.id == notification_id)
            if user_id is not None:
                stmt = stmt.where(notifications.c.user_id == user_id)
            result = session.execute(stmt.values(is_read=True))
            return result.rowcount > 0
    except Exception as e:
        logger.error(f"[notifications] error marking {notification_id} as read: {e}")
        return False


def mark_all_notifications_as_read(user_id: str) -> bool:
    try:
        with get_db_session() as session:
            session.execute(
                update(notifications)
                .where(notifications.c.user_id == user_id, notifications.c.is_read.is_(False))
                .values(is_read=True)
            )
        return True
    except Exception as e:
        logger.error(f"[notifications] error marking all as read for {user_id}: {e}")
        return False
