"""Supabase repository for notifications."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.notifications import Notification
from fitness_tracker.services.notifications import NotificationRepository


@dataclass
class SupabaseNotificationRepository(NotificationRepository):
    """Supabase-backed notification repository."""

    client: Client

    def create_notification(
        self, user_id: UUID, payload: dict[str, object]
    ) -> Notification:
        """Create a notification row and return it."""
        related_id = payload.get("related_entity_id")
        response = (
            self.client.table("notifications")
            .insert(
                {
                    "user_id": str(user_id),
                    "type": payload["type"],
                    "title": payload["title"],
                    "message": payload["message"],
                    "priority": payload.get("priority", "normal"),
                    "related_entity_type": payload.get("related_entity_type"),
                    "related_entity_id": str(related_id) if related_id else None,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create notification")
        return _parse_notification(response.data[0])

    def list_notifications(
        self, user_id: UUID, unread_only: bool, limit: int
    ) -> list[Notification]:
        """Return the user's notifications, newest first."""
        query = (
            self.client.table("notifications").select("*").eq("user_id", str(user_id))
        )
        if unread_only:
            query = query.eq("is_read", False)
        response = query.order("created_at", desc=True).limit(limit).execute()
        return [_parse_notification(row) for row in response.data or []]

    def mark_read(self, user_id: UUID, notification_id: UUID) -> Notification | None:
        """Mark a notification read, if owned by the user."""
        response = (
            self.client.table("notifications")
            .update({"is_read": True})
            .eq("id", str(notification_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_notification(response.data[0])


def _parse_notification(row: dict[str, object]) -> Notification:
    created_raw = row.get("created_at")
    related_id = row.get("related_entity_id")
    return Notification(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        type=str(row.get("type", "other")),
        title=str(row.get("title", "")),
        message=str(row.get("message", "")),
        priority=str(row.get("priority") or "normal"),
        is_read=bool(row.get("is_read", False)),
        related_entity_type=row.get("related_entity_type"),
        related_entity_id=UUID(related_id) if related_id else None,
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
