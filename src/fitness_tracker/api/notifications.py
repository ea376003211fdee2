"""Notification feed endpoints."""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query

from fitness_tracker.api.dependencies import get_container, get_current_user
from fitness_tracker.api.serializers import to_json
from fitness_tracker.containers import AppContainer  # noqa: TC001
from fitness_tracker.domain.users import UserRecord  # noqa: TC001

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("")
async def list_notifications(
    unread_only: bool = False,
    limit: int | None = Query(default=None, ge=1),
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's newest notifications."""
    settings = container.settings
    size = min(limit or settings.default_page_size, settings.max_page_size)
    notifications = container.notification_service.list_notifications(
        user.id, unread_only=unread_only, limit=size
    )
    return {"notifications": to_json(notifications)}


@router.post("/{notification_id}/read")
async def mark_read(
    notification_id: UUID,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    notification = container.notification_service.mark_read(user.id, notification_id)
    return to_json(notification)
