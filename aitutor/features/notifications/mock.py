"""
Demo notifications served when the caller is unauthenticated or the store is
unconfigured. Seeded so every process renders the same list; read marks
persist for the life of the store, up to `max_users` lists; the least
recently used list is dropped past that and rebuilt fresh on next access.
"""

import random
import threading
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from aitutor.models.notification import Notification

DEMO_USER = "demo"

_TEMPLATES = (
    ("Welcome to AI Tutor!", "Thanks for joining. Explore different subjects to get started.", "system", "/dashboard"),
    ("You started a learning streak!", "Keep learning daily to build your streak.", "streak", None),
    ("New math content available", "Check out new algebra lessons and practice exercises.", "topic", "/subjects/math"),
    ("3-day streak achieved!", "Congratulations on your consistent learning. Keep it up!", "achievement", None),
    ("Weekly Progress Summary", "You spent 2 hours learning this week across 3 subjects.", "summary", "/profile"),
)


class MockNotificationStore:
    def __init__(
        self,
        seed: int = 42,
        count: int = len(_TEMPLATES),
        now: Optional[datetime] = None,
        max_users: int = 1000,
    ):
        self._seed = seed
        self._count = min(count, len(_TEMPLATES))
        self._now = now
        self._max_users = max(1, max_users)
        self._lists: Dict[str, Dict[str, Notification]] = {}
        self._lock = threading.Lock()

    def _build(self, user_id: str) -> Dict[str, Notification]:
        rng = random.Random(self._seed)
        now = self._now or datetime.now(timezone.utc)
        items: Dict[str, Notification] = {}
        for index, (title, message, kind, link) in enumerate(_TEMPLATES[: self._count]):
            notification_id = f"mock-notification-{index}"
            items[notification_id] = Notification(
                id=notification_id,
                user_id=user_id,
                title=title,
                message=message,
                type=kind,
                is_read=rng.random() > 0.7,
                created_at=now - timedelta(seconds=rng.randrange(7 * 24 * 60 * 60)),
                link=link,
            )
        return items

    def _items(self, user_id: Optional[str]) -> Dict[str, Notification]:
        key = user_id or DEMO_USER
        items = self._lists.pop(key, None)
        if items is None:
            items = self._build(key)
        self._lists[key] = items
        while len(self._lists) > self._max_users:
            self._lists.pop(next(iter(self._lists)))
        return items

    def get_notifications(self, user_id: Optional[str] = None, limit: int = 10) -> List[Notification]:
        with self._lock:
            items = list(self._items(user_id).values())
        items.sort(key=lambda n: n.created_at, reverse=True)
        return items[: max(0, limit)]

    def mark_as_read(self, notification_id: str, user_id: Optional[str] = None) -> bool:
        with self._lock:
            items = self._items(user_id)
            if notification_id not in items:
                return False
            items[notification_id] = items[notification_id].model_copy(update={"is_read": True})
            return True

    def mark_all_as_read(self, user_id: Optional[str] = None) -> bool:
        with self._lock:
            items = self._items(user_id)
            for notification_id, notification in items.items():
                items[notification_id] = notification.model_copy(update={"is_read": True})
        return True

    def reset(self) -> None:
        with self._lock:
            self._lists.clear()
