from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy import select, insert, update

from aitutor.core.config import settings
from aitutor.core.database import get_db_session, user_streaks
from aitutor.features.notifications.service import notify_streak
from aitutor.models.streak import MILESTONES, UserStreak

logger = logging.getLogger("aitutor")


class StreakTracker:
    """Day-over-day login streak: same day is a no-op, next day increments, any gap resets to 1."""

    def __init__(self, tz_name: Optional[str] = None):
        self._tz_name = tz_name

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self._tz_name or settings.STREAK_TIMEZONE)

    def update_login_streak(self, user_id: str, now: Optional[datetime] = None) -> int:
        """
        Record a session start and return the current streak.

        Returns 0 if the store fails; callers treat that as "streak unknown".
        """
        today = self.calendar_day(now or datetime.now(timezone.utc))
        try:
            streak, notify_days = self._apply_login(user_id, today)
        except Exception as e:
            logger.error(f"[streaks] error updating login streak for {user_id}: {e}")
            return 0

        if notify_days is not None:
            notify_streak(user_id, notify_days)
        return streak.current_streak

    def get_user_streak(self, user_id: str) -> Optional[UserStreak]:
        try:
            with get_db_session() as session:
                row = session.execute(select(user_streaks).where(user_streaks.c.user_id == user_id)).first()
                return self._row_to_streak(row) if row else None
        except Exception as e:
            logger.error(f"[streaks] error getting streak for {user_id}: {e}")
            return None

    def reset_user_streak(self, user_id: str) -> bool:
        """Zero the counters. Earned milestones are kept so none is ever notified twice."""
        values = dict(current_streak=0, longest_streak=0, last_login_date=None)
        try:
            with get_db_session() as session:
                result = session.execute(
                    update(user_streaks).where(user_streaks.c.user_id == user_id).values(**values)
                )
                if result.rowcount == 0:
                    session.execute(insert(user_streaks).values(user_id=user_id, streak_milestones=[], **values))
            return True
        except Exception as e:
            logger.error(f"[streaks] error resetting streak for {user_id}: {e}")
            return False

    def get_state(self, user_id: str) -> dict:
        streak = self.get_user_streak(user_id) or UserStreak(user_id=user_id)
        state = streak.to_dict()
        state["nextMilestone"] = next((m for m in MILESTONES if m > streak.current_streak), None)
        return state

    def calendar_day(self, moment: datetime) -> date:
        aware = moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)
        return aware.astimezone(self.tz).date()

    # Internal helpers -------------------------------------------------
    def _apply_login(self, user_id: str, today: date) -> tuple[UserStreak, Optional[int]]:
        """Returns the new streak and the day count to notify about, if any."""
        with get_db_session() as session:
            row = session.execute(
                select(user_streaks).where(user_streaks.c.user_id == user_id).with_for_update()
            ).first()

            # First ever login
            if row is None:
                streak = UserStreak(user_id=user_id, current_streak=1, longest_streak=1, last_login_date=today)
                session.execute(
                    insert(user_streaks).values(
                        user_id=user_id,
                        current_streak=1,
                        longest_streak=1,
                        last_login_date=today,
                        streak_milestones=[],
                    )
                )
                return streak, 1

            streak = self._row_to_streak(row)
            if streak.last_login_date is None:
                gap_days = None
            else:
                gap_days = (today - streak.last_login_date).days

            # Same-day reload (or a clock that went backwards)
            if gap_days is not None and gap_days <= 0:
                return streak, None

            increased = gap_days == 1
            streak.current_streak = streak.current_streak + 1 if increased else 1
            streak.longest_streak = max(streak.longest_streak, streak.current_streak)
            streak.last_login_date = today

            notify_days = None
            if increased and streak.current_streak in MILESTONES and streak.current_streak not in streak.streak_milestones:
                streak.streak_milestones.append(streak.current_streak)
                notify_days = streak.current_streak

            session.execute(
                update(user_streaks)
                .where(user_streaks.c.user_id == user_id)
                .values(
                    current_streak=streak.current_streak,
                    longest_streak=streak.longest_streak,
                    last_login_date=today,
                    streak_milestones=list(streak.streak_milestones),
                )
            )
            return streak, notify_days

    @staticmethod
    def _row_to_streak(row) -> UserStreak:
        return UserStreak(
            user_id=row.user_id,
            current_streak=row.current_streak or 0,
            longest_streak=row.longest_streak or 0,
            last_login_date=row.last_login_date,
            streak_milestones=list(row.streak_milestones or []),
        )


# Singleton tracker used by routes
streak_tracker = StreakTracker()


def update_login_streak(user_id: str, now: Optional[datetime] = None) -> int:
    return streak_tracker.update_login_streak(user_id, now=now)
