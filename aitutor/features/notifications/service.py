"""Notification triggers: streaks, topic completion, achievements and weekly summaries."""

import logging
from datetime import datetime
from typing import Optional

from aitutor.features.notifications.store import create_notification
from aitutor.models.profile import UserProfile

logger = logging.getLogger("aitutor")


def notify_streak(user_id: str, streak_days: int, now: Optional[datetime] = None) -> bool:
    if streak_days == 1:
        title = "You started a learning streak!"
        message = "Welcome back tomorrow to keep your learning streak going."
    else:
        title = f"{streak_days} Day Streak!"
        message = (
            f"Congratulations! You've maintained a {streak_days}-day learning streak. "
            "Keep up the great work!"
        )
    return create_notification(user_id, title, message, "streak", now=now) is not None


def notify_topic_completion(user_id: str, subject_id: str, subject_name: str, topic_name: str) -> bool:
    return create_notification(
        user_id,
        "Topic Completed!",
        f'You\'ve completed the "{topic_name}" topic in {subject_name}. '
        "Keep learning to master this subject!",
        "milestone",
        link=f"/subjects/{subject_id}",
    ) is not None


def notify_achievement(user_id: str, achievement_name: str, description: str) -> bool:
    return create_notification(
        user_id,
        f"Achievement Unlocked: {achievement_name}",
        description,
        "achievement",
    ) is not None


def notify_weekly_summary(
    user_id: str,
    *,
    messages_count: int,
    topics_completed: int,
    minutes_studied: int,
    now: Optional[datetime] = None,
) -> bool:
    return create_notification(
        user_id,
        "Your Weekly Learning Summary",
        f"This week you exchanged {messages_count} messages, completed {topics_completed} topics, "
        f"and studied for {minutes_studied} minutes.",
        "summary",
        link="/profile",
        now=now,
    ) is not None


def send_email_notification(profile: UserProfile, subject: str, body: str) -> bool:
    """Log-only e-mail hook; no delivery provider is wired in."""
    if not profile.preferences.email_updates or not profile.email:
        return False
    logger.info(
        f"[email] would send '{subject}' to {profile.email} ({len(body)} chars)",
        extra={"user_id": profile.uid, "event_type": "email.queued"},
    )
    return True
