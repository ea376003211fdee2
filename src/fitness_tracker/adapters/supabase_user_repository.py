"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.users import UserRecord
from fitness_tracker.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user lookups."""

    client: Client

    def get_by_token_hash(self, token_hash: str) -> UserRecord | None:
        """Return the account owning an API token hash, if present."""
        response = (
            self.client.table("users")
            .select("id, username, email, is_active")
            .eq("api_token_hash", token_hash)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return UserRecord(
            id=UUID(row["id"]),
            username=str(row.get("username", "")),
            email=row.get("email"),
            is_active=bool(row.get("is_active", True)),
        )

    def touch_last_active(self, user_id: UUID) -> None:
        """Update the last_active_at timestamp for a user."""
        self.client.table("users").update(
            {"last_active_at": datetime.now(tz=UTC).isoformat()}
        ).eq("id", str(user_id)).execute()
