"""Supabase repository for body progress entries."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.progress import ProgressEntry
from fitness_tracker.services.progress import ProgressRepository


@dataclass
class SupabaseProgressRepository(ProgressRepository):
    """Supabase implementation for progress entries."""

    client: Client

    def list_entries(  # noqa: PLR0913
        self,
        user_id: UUID,
        type_: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> tuple[list[ProgressEntry], int]:
        """Return entries newest first plus the total matching count."""
        query = (
            self.client.table("progress_entries")
            .select("*", count="exact")
            .eq("user_id", str(user_id))
        )
        if type_:
            query = query.eq("type", type_)
        if start:
            query = query.gte("recorded_at", start.isoformat())
        if end:
            query = query.lte("recorded_at", end.isoformat())
        query = query.order("recorded_at", desc=True)
        if limit is not None:
            query = query.range(offset, offset + limit - 1)
        response = query.execute()
        entries = [_parse_entry(row) for row in response.data or []]
        total = response.count if response.count is not None else len(entries)
        return entries, total

    def get_entry(self, user_id: UUID, entry_id: UUID) -> ProgressEntry | None:
        """Return an entry if it exists and belongs to the user."""
        response = (
            self.client.table("progress_entries")
            .select("*")
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def create_entry(self, user_id: UUID, payload: dict[str, object]) -> ProgressEntry:
        """Create an entry row and return it."""
        recorded_at = payload["date"]
        response = (
            self.client.table("progress_entries")
            .insert(
                {
                    "user_id": str(user_id),
                    "type": payload["type"],
                    "recorded_at": recorded_at.isoformat(),
                    "data": payload.get("data") or {},
                    "notes": payload.get("notes"),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create progress entry")
        return _parse_entry(response.data[0])

    def save_entry(self, entry: ProgressEntry) -> ProgressEntry:
        """Overwrite the stored data and notes of an entry."""
        response = (
            self.client.table("progress_entries")
            .update({"data": entry.data, "notes": entry.notes})
            .eq("id", str(entry.id))
            .eq("user_id", str(entry.user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save progress entry")
        return _parse_entry(response.data[0])

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an entry, returning False if nothing matched."""
        response = (
            self.client.table("progress_entries")
            .delete()
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)


def _parse_datetime(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        parsed = datetime.fromisoformat(raw)
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    return None


def _parse_entry(row: dict[str, object]) -> ProgressEntry:
    """Parse a progress entry row into a domain model."""
    return ProgressEntry(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        date=_parse_datetime(row.get("recorded_at")) or datetime.now(tz=UTC),
        type=str(row.get("type", "")),
        data=dict(row.get("data") or {}),
        notes=row.get("notes"),
        created_at=_parse_datetime(row.get("created_at")),
    )
