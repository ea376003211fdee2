"""Account endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from fitness_tracker.api.dependencies import get_current_user
from fitness_tracker.api.serializers import to_json
from fitness_tracker.domain.users import UserRecord  # noqa: TC001

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me")
async def current_user(
    user: UserRecord = Depends(get_current_user),
) -> dict[str, object]:
    """Return the authenticated account."""
    return to_json(user)
