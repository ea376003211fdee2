"""Domain models for user accounts."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents an account stored in the database."""

    id: UUID
    username: str
    email: str | None
    is_active: bool = True
