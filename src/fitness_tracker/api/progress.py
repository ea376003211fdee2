"""Body progress endpoints: weigh-ins, measurements, performances and trends."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, status

from fitness_tracker.api.dependencies import (
    PageParams,
    get_container,
    get_current_user,
    get_page_params,
)
from fitness_tracker.api.models import (  # noqa: TC001
    MeasurementName,
    ProgressEntryCreate,
    ProgressEntryUpdate,
    ProgressType,
    ProgressWindow,
    assume_utc,
)
from fitness_tracker.api.serializers import pagination, to_json
from fitness_tracker.containers import AppContainer  # noqa: TC001
from fitness_tracker.domain.users import UserRecord  # noqa: TC001

router = APIRouter(prefix="/progress", tags=["progress"])


def _utc(value: datetime | None) -> datetime | None:
    return assume_utc(value) if value is not None else None


@router.get("/entries")
async def list_entries(  # noqa: PLR0913
    type: ProgressType | None = None,  # noqa: A002
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    paging: PageParams = Depends(get_page_params),
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's progress entries, newest first."""
    entries, total = container.progress_service.list_entries(
        user.id,
        type,
        _utc(start_date),
        _utc(end_date),
        page=paging.page,
        limit=paging.limit,
    )
    return {
        "entries": to_json(entries),
        "pagination": pagination(paging.page, paging.limit, total),
    }


@router.get("/entries/{entry_id}")
async def entry_detail(
    entry_id: UUID,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return to_json(container.progress_service.get_entry(user.id, entry_id))


@router.post("/entries", status_code=status.HTTP_201_CREATED)
async def create_entry(
    body: ProgressEntryCreate,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    entry = container.progress_service.create_entry(
        user.id, body.type, body.data, observed_at=body.date, notes=body.notes
    )
    return to_json(entry)


@router.put("/entries/{entry_id}")
async def update_entry(
    entry_id: UUID,
    body: ProgressEntryUpdate,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Merge data values into an entry; notes are replaced when sent."""
    entry = container.progress_service.update_entry(
        user.id, entry_id, body.model_dump(exclude_unset=True)
    )
    return to_json(entry)


@router.delete("/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry_id: UUID,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> None:
    container.progress_service.delete_entry(user.id, entry_id)


@router.get("/analytics/weight")
async def weight_analytics(  # noqa: PLR0913
    period: ProgressWindow = "30d",
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Weight trend for explicit dates or a rolling window."""
    analytics = container.progress_service.get_weight_analytics(
        user.id, period=period, start=_utc(start_date), end=_utc(end_date)
    )
    return to_json(analytics)


@router.get("/analytics/measurements")
async def measurement_analytics(
    measurement: MeasurementName | None = None,
    period: ProgressWindow = "30d",
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    trends = container.progress_service.get_measurement_analytics(
        user.id, measurement=measurement, period=period
    )
    return {"measurements": to_json(trends)}


@router.get("/analytics/performance")
async def performance_analytics(
    exercise: str | None = None,
    period: ProgressWindow = "90d",
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Improvement per exercise, optionally filtered by name."""
    trends = container.progress_service.get_performance_analytics(
        user.id, exercise=exercise, period=period
    )
    return {"exercises": to_json(trends)}


@router.get("/summary")
async def progress_summary(
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return to_json(container.progress_service.get_summary(user.id))
