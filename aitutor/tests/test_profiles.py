from aitutor.features.profiles.service import (
    create_user_profile,
    get_or_create_profile,
    get_user_profile,
    update_learning_goals,
    update_notification_preferences,
    update_user_profile,
)
from aitutor.models.profile import LearningGoals, NotificationPreferences, UserProfile


def test_new_profile_gets_defaults():
    profile = get_or_create_profile("u1")

    assert profile.uid == "u1"
    assert profile.preferences.notifications is True
    assert profile.preferences.email_updates is True
    assert profile.learning_goals.daily_goal_minutes == 30
    assert profile.learning_goals.weekly_goal_days == 5
    assert profile.learning_goals.focus_subjects == []


def test_update_only_touches_editable_fields():
    create_user_profile(UserProfile(uid="u2", display_name="Old"))

    assert update_user_profile("u2", {"display_name": "New", "uid": "hijack"}) is True
    assert get_user_profile("u2").display_name == "New"
    assert get_user_profile("hijack") is None


def test_update_missing_profile_returns_false():
    assert update_user_profile("nobody", {"bio": "hi"}) is False
    assert update_user_profile("nobody", {"unknown": "x"}) is False


def test_goals_and_preferences_round_trip():
    create_user_profile(UserProfile(uid="u3"))

    update_learning_goals("u3", LearningGoals(daily_goal_minutes=45, weekly_goal_days=3, focus_subjects=["math"]))
    update_notification_preferences("u3", NotificationPreferences(notifications=False, email_updates=True))

    profile = get_user_profile("u3")
    assert profile.learning_goals.daily_goal_minutes == 45
    assert profile.learning_goals.focus_subjects == ["math"]
    assert profile.preferences.notifications is False


def test_store_failure_degrades(unconfigured_store):
    assert get_user_profile("u4") is None
    assert create_user_profile(UserProfile(uid="u4")) is False
    assert get_or_create_profile("u4") is None


def test_profile_api_flow(client):
    headers = {"X-User-Id": "api-user"}

    created = client.get("/api/profile", headers=headers)
    assert created.status_code == 200
    assert created.json()["learningGoals"] == {"dailyGoalMinutes": 30, "weeklyGoalDays": 5, "focusSubjects": []}

    updated = client.put("/api/profile", json={"displayName": "Ada", "bio": "Learner"}, headers=headers)
    assert updated.json()["displayName"] == "Ada"
    assert updated.json()["bio"] == "Learner"

    prefs = client.put("/api/profile/preferences", json={"notifications": False, "emailUpdates": False}, headers=headers)
    assert prefs.json()["preferences"] == {"notifications": False, "emailUpdates": False}

    goals = client.put("/api/profile/goals", json={"dailyGoalMinutes": 60, "weeklyGoalDays": 7}, headers=headers)
    assert goals.json()["learningGoals"]["weeklyGoalDays"] == 7


def test_profile_api_rejects_bad_goals(client):
    resp = client.put("/api/profile/goals", json={"weeklyGoalDays": 9}, headers={"X-User-Id": "u5"})
    assert resp.status_code == 400


def test_profile_api_empty_update_is_400(client):
    resp = client.put("/api/profile", json={}, headers={"X-User-Id": "u6"})
    assert resp.status_code == 400


def test_profile_requires_auth(client):
    assert client.get("/api/profile").status_code == 401
