"""
Weekly learning summary.

Aggregates each user's activity over the last seven days (counted from local
midnight in the streak timezone) and sends one summary notification per
active user. Per-user failures are counted, not raised.
"""

import logging
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional
from zoneinfo import ZoneInfo

from aitutor.core.config import settings
from aitutor.features.notifications.service import notify_weekly_summary, send_email_notification
from aitutor.features.profiles.service import list_user_profiles
from aitutor.features.progress.store import list_progress_accessed_since

logger = logging.getLogger("aitutor")

SUMMARY_WINDOW_DAYS = 7


def summary_window_start(now: datetime, tz_name: Optional[str] = None) -> datetime:
    """Local midnight seven days before `now`, returned in UTC."""
    tz = ZoneInfo(tz_name or settings.STREAK_TIMEZONE)
    aware = now if now.tzinfo else now.replace(tzinfo=timezone.utc)
    local = aware.astimezone(tz) - timedelta(days=SUMMARY_WINDOW_DAYS)
    midnight = local.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight.astimezone(timezone.utc)


def _weekly_totals(since: datetime) -> Dict[str, Dict[str, int]]:
    totals: Dict[str, Dict[str, int]] = defaultdict(
        lambda: {"messages_count": 0, "topics_completed": 0, "minutes_studied": 0}
    )
    for record in list_progress_accessed_since(since):
        entry = totals[record.user_id]
        entry["messages_count"] += record.messages_count
        entry["topics_completed"] += len(record.completed_topics)
        entry["minutes_studied"] += record.study_minutes
    return totals


def send_weekly_summaries(now: Optional[datetime] = None) -> Dict[str, int]:
    """
    Returns {"success", "errors", "total"} where total is the number of
    profiles scanned. Raises if profiles or progress cannot be listed at all.
    """
    now = now or datetime.now(timezone.utc)
    since = summary_window_start(now)

    profiles = list_user_profiles()
    totals = _weekly_totals(since)

    success = 0
    errors = 0
    for profile in profiles:
        if not profile.preferences.notifications:
            continue

        stats = totals.get(profile.uid)
        if not stats or not any(stats.values()):
            continue

        if notify_weekly_summary(profile.uid, now=now, **stats):
            success += 1
            send_email_notification(
                profile,
                "Your Weekly Learning Summary",
                f"{stats['messages_count']} messages, {stats['topics_completed']} topics, "
                f"{stats['minutes_studied']} minutes this week.",
            )
        else:
            errors += 1
            logger.warning(f"[summary] failed to send weekly summary to {profile.uid}")

    logger.info(
        f"[summary] weekly summaries sent={success} errors={errors} profiles={len(profiles)}",
        extra={"event_type": "summary.completed"},
    )
    return {"success": success, "errors": errors, "total": len(profiles)}
