"""
Polling client for the notifications endpoint.

Read state is monotonic on the client: an id marked read locally stays read
even if the server never confirms it or a later poll still reports it unread.
"""

import logging
import threading
import time
from typing import Any, Callable, Dict, Iterable, List, Optional

import httpx

logger = logging.getLogger("aitutor.client")

NOTIFICATIONS_PATH = "/api/notifications"


def merge_read_state(server: Iterable[Dict[str, Any]], local_overrides: Iterable[str]) -> List[Dict[str, Any]]:
    """Server notifications with isRead forced to True for every locally read id."""
    overrides = set(local_overrides)
    merged = []
    for notification in server:
        if notification.get("id") in overrides and not notification.get("isRead"):
            notification = {**notification, "isRead": True}
        merged.append(notification)
    return merged


class NotificationBell:
    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        *,
        limit: int = 5,
        poll_interval: float = 30.0,
        dedupe_interval: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.token = token
        self.limit = limit
        self.poll_interval = poll_interval
        self.dedupe_interval = dedupe_interval
        self._client = client or httpx.Client(base_url=base_url, timeout=10.0)
        self._clock = clock
        self._lock = threading.Lock()
        self._overrides: set = set()
        self._last_fetch: Optional[float] = None
        self.notifications: List[Dict[str, Any]] = []
        self.is_mock_data = False

    @property
    def unread_count(self) -> int:
        return sum(1 for notification in self.notifications if not notification.get("isRead"))

    def _headers(self) -> Dict[str, str]:
        headers = {"Cache-Control": "no-cache"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def poll(self, force: bool = False) -> List[Dict[str, Any]]:
        """
        Fetch and merge the latest notifications. Calls within the dedupe
        window return the cached list; fetch errors and malformed bodies keep
        the stale list.
        """
        if not self.token:
            return self.notifications

        now = self._clock()
        if not force and self._last_fetch is not None and now - self._last_fetch < self.dedupe_interval:
            return self.notifications
        self._last_fetch = now

        try:
            response = self._client.get(NOTIFICATIONS_PATH, params={"limit": self.limit}, headers=self._headers())
            response.raise_for_status()
            body = response.json()
            data = body.get("data") or []
            if not isinstance(data, list):
                raise ValueError(f"expected a list of notifications, got {type(data).__name__}")
            items = [n for n in data if isinstance(n, dict)]
            is_mock = bool(body.get("isMockData"))
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.warning(f"[bell] poll failed: {e}")
            return self.notifications

        with self._lock:
            self.notifications = merge_read_state(items, self._overrides)
            self.is_mock_data = is_mock
            return self.notifications

    def on_focus(self) -> List[Dict[str, Any]]:
        return self.poll()

    def run(self, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            self.poll()
            stop_event.wait(self.poll_interval)

    def mark_as_read(self, notification_id: str) -> bool:
        """Optimistic; returns whether the server accepted it. Local state never reverts."""
        if not self.token:
            return False
        with self._lock:
            self._overrides.add(notification_id)
            self.notifications = merge_read_state(self.notifications, self._overrides)
        return self._persist({"id": notification_id})

    def mark_all_as_read(self) -> bool:
        if not self.token:
            return False
        if self.unread_count == 0:
            return True
        with self._lock:
            self._overrides.update(n["id"] for n in self.notifications if n.get("id"))
            self.notifications = merge_read_state(self.notifications, self._overrides)
        return self._persist({"markAllRead": True})

    def _persist(self, payload: Dict[str, Any]) -> bool:
        try:
            response = self._client.post(NOTIFICATIONS_PATH, json=payload, headers=self._headers())
            response.raise_for_status()
            return True
        except httpx.HTTPError as e:
            logger.warning(f"[bell] failed to persist read state {payload}: {e}")
            return False

    def close(self) -> None:
        self._client.close()
