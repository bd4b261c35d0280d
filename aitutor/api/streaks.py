from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from aitutor.core.auth import get_current_user_id
from aitutor.features.streaks.service import streak_tracker

router = APIRouter(prefix="/api/streaks", tags=["streaks"])


@router.post("/login")
def record_login(user_id: str = Depends(get_current_user_id)):
    """Called once per session start. currentStreak is 0 when the store failed."""
    current = streak_tracker.update_login_streak(user_id, now=datetime.now(timezone.utc))
    return {"currentStreak": current, "state": streak_tracker.get_state(user_id)}


@router.get("/current")
def get_current_streak(user_id: str = Depends(get_current_user_id)):
    """Return the current streak state for a user."""
    return streak_tracker.get_state(user_id)


@router.post("/reset")
def reset_streak(user_id: str = Depends(get_current_user_id)):
    """Zero the caller's streak. Milestones already earned stay earned."""
    ok = streak_tracker.reset_user_streak(user_id)
    return {"success": ok, "state": streak_tracker.get_state(user_id)}
