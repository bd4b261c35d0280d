from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class NotificationPreferences(BaseModel):
    notifications: bool = True
    email_updates: bool = True


class LearningGoals(BaseModel):
    daily_goal_minutes: Optional[int] = Field(default=30, ge=0)
    weekly_goal_days: Optional[int] = Field(default=5, ge=0, le=7)
    focus_subjects: List[str] = Field(default_factory=list)


class UserProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    uid: str
    display_name: str = ""
    email: str = ""
    photo_url: Optional[str] = None
    bio: Optional[str] = None
    created_at: Optional[datetime] = None
    last_updated: Optional[datetime] = None
    preferences: NotificationPreferences = Field(default_factory=NotificationPreferences)
    learning_goals: LearningGoals = Field(default_factory=LearningGoals)
