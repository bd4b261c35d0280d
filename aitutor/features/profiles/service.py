"""
User profile service.
- get_user_profile(uid)
- create_user_profile(profile)
- update_user_profile / update_learning_goals / update_notification_preferences

Store errors are logged and reported as None/False; the UI keeps working.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select, insert, update

from aitutor.core.database import get_db_session, user_profiles
from aitutor.models.profile import LearningGoals, NotificationPreferences, UserProfile
from aitutor.models.progress import as_utc

logger = logging.getLogger("aitutor")

_EDITABLE_FIELDS = ("display_name", "email", "photo_url", "bio")


def _row_to_profile(row) -> UserProfile:
    goals = row.learning_goals or {}
    return UserProfile(
        uid=row.uid,
        display_name=row.display_name or "",
        email=row.email or "",
        photo_url=row.photo_url,
        bio=row.bio,
        created_at=as_utc(row.created_at),
        last_updated=as_utc(row.last_updated),
        preferences=NotificationPreferences(
            notifications=bool(row.notifications_enabled),
            email_updates=bool(row.email_updates),
        ),
        learning_goals=LearningGoals(**goals),
    )


def get_user_profile(uid: str) -> Optional[UserProfile]:
    try:
        with get_db_session() as session:
            row = session.execute(select(user_profiles).where(user_profiles.c.uid == uid)).first()
            return _row_to_profile(row) if row else None
    except Exception as e:
        logger.error(f"[profiles] error getting profile for {uid}: {e}")
        return None


def list_user_profiles() -> List[UserProfile]:
    """Every profile; raises on store errors (batch jobs count failures themselves)."""
    with get_db_session() as session:
        rows = session.execute(select(user_profiles).order_by(user_profiles.c.uid)).all()
        return [_row_to_profile(row) for row in rows]


def create_user_profile(profile: UserProfile) -> bool:
    now = datetime.now(timezone.utc)
    try:
        with get_db_session() as session:
            session.execute(
                insert(user_profiles).values(
                    uid=profile.uid,
                    display_name=profile.display_name,
                    email=profile.email,
                    photo_url=profile.photo_url,
                    bio=profile.bio,
                    notifications_enabled=profile.preferences.notifications,
                    email_updates=profile.preferences.email_updates,
                    learning_goals=profile.learning_goals.model_dump(),
                    created_at=now,
                    last_updated=now,
                )
            )
        return True
    except Exception as e:
        logger.error(f"[profiles] error creating profile for {profile.uid}: {e}")
        return False


def get_or_create_profile(uid: str) -> Optional[UserProfile]:
    existing = get_user_profile(uid)
    if existing:
        return existing
    if not create_user_profile(UserProfile(uid=uid)):
        return None
    return get_user_profile(uid)


def _apply(uid: str, values: Dict[str, Any]) -> bool:
    values = dict(values, last_updated=datetime.now(timezone.utc))
    try:
        with get_db_session() as session:
            result = session.execute(
                update(user_profiles).where(user_profiles.c.uid == uid).values(**values)
            )
            return result.rowcount > 0
    except Exception as e:
        logger.error(f"[profiles] error updating profile for {uid}: {e}")
        return False


def update_user_profile(uid: str, updates: Dict[str, Any]) -> bool:
    values = {key: value for key, value in updates.items() if key in _EDITABLE_FIELDS}
    if not values:
        return False
    return _apply(uid, values)


def update_learning_goals(uid: str, goals: LearningGoals) -> bool:
    return _apply(uid, {"learning_goals": goals.model_dump()})


def update_notification_preferences(uid: str, preferences: NotificationPreferences) -> bool:
    return _apply(
        uid,
        {
            "notifications_enabled": preferences.notifications,
            "email_updates": preferences.email_updates,
        },
    )
