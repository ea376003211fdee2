"""User account lookups."""

import hashlib
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.users import UserRecord


class UserRepository(Protocol):
    """Persistence interface for user accounts."""

    def get_by_token_hash(self, token_hash: str) -> UserRecord | None:
        """Return the account owning an API token hash, if present."""

    def touch_last_active(self, user_id: UUID) -> None:
        """Update the last active timestamp for the user."""


def hash_token(token: str) -> str:
    """Return the stored representation of an API token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


@dataclass
class UserService:
    """Application service for resolving the requesting account."""

    repository: UserRepository

    def authenticate(self, token: str | None) -> UserRecord | None:
        """Return the active account for a bearer token, if any."""
        if not token:
            return None
        user = self.repository.get_by_token_hash(hash_token(token))
        if user is None or not user.is_active:
            return None
        self.repository.touch_last_active(user.id)
        return user
