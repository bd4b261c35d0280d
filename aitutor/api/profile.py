"""
Profile API

GET /api/profile                 profile for the caller (created with defaults on first read)
PUT /api/profile                 display name, email, photo URL, bio
PUT /api/profile/preferences     in-app and e-mail notification switches
PUT /api/profile/goals           daily minutes, weekly days, focus subjects
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from aitutor.core.auth import get_current_user_id
from aitutor.core.errors import StoreUnavailableError, ValidationError
from aitutor.features.profiles.service import (
    get_or_create_profile,
    update_learning_goals,
    update_notification_preferences,
    update_user_profile,
)
from aitutor.models.profile import LearningGoals, NotificationPreferences, UserProfile

router = APIRouter(prefix="/api/profile", tags=["profile"])


class ProfileUpdate(BaseModel):
    displayName: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = None
    photoURL: Optional[str] = None
    bio: Optional[str] = Field(None, max_length=500)


class PreferencesUpdate(BaseModel):
    notifications: bool = True
    emailUpdates: bool = True


class GoalsUpdate(BaseModel):
    dailyGoalMinutes: Optional[int] = Field(30, ge=0)
    weeklyGoalDays: Optional[int] = Field(5, ge=0, le=7)
    focusSubjects: List[str] = Field(default_factory=list)


def profile_to_dict(profile: UserProfile) -> dict:
    return {
        "uid": profile.uid,
        "displayName": profile.display_name,
        "email": profile.email,
        "photoURL": profile.photo_url,
        "bio": profile.bio,
        "createdAt": profile.created_at.isoformat() if profile.created_at else None,
        "lastUpdated": profile.last_updated.isoformat() if profile.last_updated else None,
        "preferences": {
            "notifications": profile.preferences.notifications,
            "emailUpdates": profile.preferences.email_updates,
        },
        "learningGoals": {
            "dailyGoalMinutes": profile.learning_goals.daily_goal_minutes,
            "weeklyGoalDays": profile.learning_goals.weekly_goal_days,
            "focusSubjects": list(profile.learning_goals.focus_subjects),
        },
    }


def _load(user_id: str) -> UserProfile:
    profile = get_or_create_profile(user_id)
    if profile is None:
        raise StoreUnavailableError("Profile store is unavailable")
    return profile


@router.get("")
def get_profile(user_id: str = Depends(get_current_user_id)):
    return profile_to_dict(_load(user_id))


@router.put("")
def put_profile(body: ProfileUpdate, user_id: str = Depends(get_current_user_id)):
    updates = {
        "display_name": body.displayName,
        "email": body.email,
        "photo_url": body.photoURL,
        "bio": body.bio,
    }
    updates = {key: value for key, value in updates.items() if value is not None}
    if not updates:
        raise ValidationError("No profile fields to update")

    _load(user_id)
    if not update_user_profile(user_id, updates):
        raise StoreUnavailableError("Failed to update profile")
    return profile_to_dict(_load(user_id))


@router.put("/preferences")
def put_preferences(body: PreferencesUpdate, user_id: str = Depends(get_current_user_id)):
    _load(user_id)
    preferences = NotificationPreferences(notifications=body.notifications, email_updates=body.emailUpdates)
    if not update_notification_preferences(user_id, preferences):
        raise StoreUnavailableError("Failed to update notification preferences")
    return profile_to_dict(_load(user_id))


@router.put("/goals")
def put_goals(body: GoalsUpdate, user_id: str = Depends(get_current_user_id)):
    _load(user_id)
    goals = LearningGoals(
        daily_goal_minutes=body.dailyGoalMinutes,
        weekly_goal_days=body.weeklyGoalDays,
        focus_subjects=body.focusSubjects,
    )
    if not update_learning_goals(user_id, goals):
        raise StoreUnavailableError("Failed to update learning goals")
    return profile_to_dict(_load(user_id))
