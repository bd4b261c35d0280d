from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

MILESTONES = (3, 5, 7, 10, 14, 21, 30, 60, 90, 100, 365)


@dataclass
class UserStreak:
    """
    Login streak for one user. Day-level; the calendar day is taken in the
    configured streak timezone. longest_streak >= current_streak always.
    """

    user_id: str
    current_streak: int = 0
    longest_streak: int = 0
    last_login_date: Optional[date] = None
    streak_milestones: List[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
            "lastLoginDate": self.last_login_date.isoformat() if self.last_login_date else None,
            "streakMilestones": list(self.streak_milestones),
        }
