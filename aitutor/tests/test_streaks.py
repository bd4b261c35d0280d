from datetime import datetime, timedelta, timezone

from aitutor.features.notifications.store import get_user_notifications
from aitutor.features.streaks.service import StreakTracker


def _day(n: int, hour: int = 10) -> datetime:
    return datetime(2024, 1, 1, hour, 0, tzinfo=timezone.utc) + timedelta(days=n)


def _streak_titles(user_id: str):
    return [n.title for n in get_user_notifications(user_id, limit=100) if n.type == "streak"]


def test_first_login_starts_streak_and_notifies():
    tracker = StreakTracker("UTC")

    assert tracker.update_login_streak("u1", now=_day(0)) == 1

    streak = tracker.get_user_streak("u1")
    assert streak.current_streak == 1
    assert streak.longest_streak == 1
    assert streak.last_login_date == _day(0).date()
    assert _streak_titles("u1") == ["You started a learning streak!"]


def test_same_day_login_does_not_change_streak():
    tracker = StreakTracker("UTC")
    tracker.update_login_streak("u2", now=_day(0, hour=1))
    tracker.update_login_streak("u2", now=_day(1, hour=1))

    assert tracker.update_login_streak("u2", now=_day(1, hour=23)) == 2
    assert tracker.update_login_streak("u2", now=_day(1, hour=23)) == 2
    assert tracker.get_user_streak("u2").current_streak == 2


def test_consecutive_days_increment_and_raise_longest():
    tracker = StreakTracker("UTC")
    for n in range(4):
        current = tracker.update_login_streak("u3", now=_day(n))

    assert current == 4
    streak = tracker.get_user_streak("u3")
    assert streak.longest_streak == 4


def test_gap_resets_current_but_keeps_longest():
    tracker = StreakTracker("UTC")
    for n in range(4):
        tracker.update_login_streak("u4", now=_day(n))

    assert tracker.update_login_streak("u4", now=_day(6)) == 1
    streak = tracker.get_user_streak("u4")
    assert streak.current_streak == 1
    assert streak.longest_streak == 4


def test_milestone_notified_once_even_after_reset():
    tracker = StreakTracker("UTC")
    for n in range(3):
        tracker.update_login_streak("u5", now=_day(n))

    assert tracker.get_user_streak("u5").streak_milestones == [3]
    assert _streak_titles("u5").count("3 Day Streak!") == 1

    # Break the streak and climb back to 3
    for n in range(10, 13):
        tracker.update_login_streak("u5", now=_day(n))

    assert tracker.get_user_streak("u5").current_streak == 3
    assert tracker.get_user_streak("u5").streak_milestones == [3]
    assert _streak_titles("u5").count("3 Day Streak!") == 1

    # Reset and climb back to 3 once more
    assert tracker.reset_user_streak("u5") is True
    for n in range(20, 23):
        tracker.update_login_streak("u5", now=_day(n))

    assert tracker.get_user_streak("u5").current_streak == 3
    assert tracker.get_user_streak("u5").streak_milestones == [3]
    assert _streak_titles("u5").count("3 Day Streak!") == 1


def test_non_milestone_days_do_not_notify():
    tracker = StreakTracker("UTC")
    tracker.update_login_streak("u6", now=_day(0))
    tracker.update_login_streak("u6", now=_day(1))

    assert _streak_titles("u6") == ["You started a learning streak!"]


def test_calendar_day_uses_configured_timezone():
    tracker = StreakTracker("America/New_York")
    # 23:30 New York on Jan 1 and 00:30 New York on Jan 2
    first = datetime(2024, 1, 2, 4, 30, tzinfo=timezone.utc)
    second = datetime(2024, 1, 2, 5, 30, tzinfo=timezone.utc)

    tracker.update_login_streak("u7", now=first)
    assert tracker.update_login_streak("u7", now=second) == 2


def test_store_failure_returns_zero(unconfigured_store):
    tracker = StreakTracker("UTC")
    assert tracker.update_login_streak("u8", now=_day(0)) == 0


def test_reset_user_streak_zeroes_record():
    tracker = StreakTracker("UTC")
    tracker.update_login_streak("u9", now=_day(0))

    assert tracker.reset_user_streak("u9") is True
    streak = tracker.get_user_streak("u9")
    assert streak.current_streak == 0
    assert streak.longest_streak == 0
    assert streak.last_login_date is None
    assert streak.streak_milestones == []


def test_state_reports_next_milestone():
    tracker = StreakTracker("UTC")
    tracker.update_login_streak("u10", now=_day(0))

    state = tracker.get_state("u10")
    assert state["currentStreak"] == 1
    assert state["nextMilestone"] == 3
