"""Notification feed service."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.notifications import Notification
from fitness_tracker.services.errors import NotFoundError

_logger = logging.getLogger(__name__)


class NotificationRepository(Protocol):
    """Persistence interface for notifications."""

    def create_notification(
        self, user_id: UUID, payload: dict[str, object]
    ) -> Notification:
        """Create a notification and return it."""

    def list_notifications(
        self, user_id: UUID, unread_only: bool, limit: int
    ) -> list[Notification]:
        """Return the user's notifications, newest first."""

    def mark_read(self, user_id: UUID, notification_id: UUID) -> Notification | None:
        """Mark a notification read and return it, if owned by the user."""


@dataclass
class NotificationService:
    """Service for creating and reading notifications."""

    repository: NotificationRepository

    def notify(  # noqa: PLR0913
        self,
        user_id: UUID,
        type_: str,
        title: str,
        message: str,
        related_goal_id: UUID | None = None,
    ) -> Notification | None:
        """Create a notification, logging instead of raising on failure."""
        payload: dict[str, object] = {
            "type": type_,
            "title": title,
            "message": message,
        }
        if related_goal_id is not None:
            payload["related_entity_type"] = "goal"
            payload["related_entity_id"] = related_goal_id
        try:
            return self.repository.create_notification(user_id, payload)
        except Exception:
            _logger.exception(
                "Failed to create notification",
                extra={"user_id": str(user_id), "notification_type": type_},
            )
            return None

    def list_notifications(
        self, user_id: UUID, unread_only: bool = False, limit: int = 20
    ) -> list[Notification]:
        """Return recent notifications for the user."""
        return self.repository.list_notifications(user_id, unread_only, limit)

    def mark_read(self, user_id: UUID, notification_id: UUID) -> Notification:
        """Mark one of the user's notifications as read."""
        notification = self.repository.mark_read(user_id, notification_id)
        if notification is None:
            raise NotFoundError("Notification not found")
        return notification
