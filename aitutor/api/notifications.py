"""
Notifications API.

Unauthenticated callers, and every caller while the store is unconfigured,
get the seeded demo list so the bell keeps rendering.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel

from aitutor.core.auth import bearer_token, get_optional_user_id, verify_id_token
from aitutor.core.config import settings
from aitutor.core.database import is_configured
from aitutor.core.errors import AppError, StoreUnavailableError, UnauthorizedError, ValidationError
from aitutor.features.notifications.mock import MockNotificationStore
from aitutor.features.notifications.store import (
    get_user_notifications,
    mark_all_notifications_as_read,
    mark_notification_as_read,
)
from aitutor.features.notifications.summary import send_weekly_summaries

logger = logging.getLogger("aitutor")

router = APIRouter(prefix="/api/notifications", tags=["notifications"])

mock_store = MockNotificationStore(seed=settings.MOCK_NOTIFICATIONS_SEED)


def get_mock_store() -> MockNotificationStore:
    return mock_store


class MarkReadRequest(BaseModel):
    id: Optional[str] = None
    markAllRead: bool = False


def _use_mock(user_id: Optional[str]) -> bool:
    return user_id is None or not is_configured()


@router.get("")
def list_notifications(
    limit: int = Query(10, ge=0, le=100),
    user_id: Optional[str] = Depends(get_optional_user_id),
    mock: MockNotificationStore = Depends(get_mock_store),
):
    if _use_mock(user_id):
        logger.info("[notifications] serving mock notifications", extra={"user_id": user_id})
        items = mock.get_notifications(user_id, limit)
        return {"success": True, "data": [n.to_api() for n in items], "isMockData": True}

    items = get_user_notifications(user_id, limit)
    return {"success": True, "data": [n.to_api() for n in items], "isMockData": False}


@router.post("")
def update_notifications(
    body: MarkReadRequest,
    user_id: Optional[str] = Depends(get_optional_user_id),
    mock: MockNotificationStore = Depends(get_mock_store),
):
    if not body.markAllRead and not body.id:
        raise ValidationError("Provide a notification id or markAllRead")

    if _use_mock(user_id):
        if body.markAllRead:
            mock.mark_all_as_read(user_id)
        else:
            mock.mark_as_read(body.id, user_id)
        return {"success": True, "mock": True}

    if body.markAllRead:
        ok = mark_all_notifications_as_read(user_id)
    else:
        ok = mark_notification_as_read(body.id, user_id)
    return {"success": ok}


@router.post("/mark-all-read")
def mark_all_read(
    user_id: Optional[str] = Depends(get_optional_user_id),
    mock: MockNotificationStore = Depends(get_mock_store),
):
    if _use_mock(user_id):
        mock.mark_all_as_read(user_id)
        return {"success": True, "mock": True}
    return {"success": mark_all_notifications_as_read(user_id)}


@router.post("/send-weekly-summary")
def send_weekly_summary(request: Request):
    """Service-to-service trigger; accepts the shared secret or a valid ID token."""
    token = bearer_token(request)
    if not token:
        raise UnauthorizedError("Missing or invalid authorization token")

    if not (settings.NOTIFICATIONS_API_KEY and token == settings.NOTIFICATIONS_API_KEY):
        try:
            caller = verify_id_token(token)
        except Exception as e:
            logger.warning(f"[summary] token verification failed: {e}")
            caller = None
        if not caller:
            raise UnauthorizedError("Unauthorized - invalid token")

    if not is_configured():
        raise StoreUnavailableError("Internal server error - database not available", status_code=500)

    try:
        stats = send_weekly_summaries()
    except Exception as e:
        logger.error(f"[summary] error processing weekly summaries: {e}", exc_info=True)
        raise AppError("Internal server error")

    if stats["total"] == 0:
        return {"message": "No users found for weekly summary", "stats": stats}
    return {"message": "Weekly summary notifications processed", "stats": stats}


@router.post("/{notification_id}/read")
def mark_read(
    notification_id: str,
    user_id: Optional[str] = Depends(get_optional_user_id),
    mock: MockNotificationStore = Depends(get_mock_store),
):
    if _use_mock(user_id):
        mock.mark_as_read(notification_id, user_id)
        return {"success": True, "mock": True}
    return {"success": mark_notification_as_read(notification_id, user_id)}
