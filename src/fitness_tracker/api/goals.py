"""Goal endpoints: CRUD, progress updates, milestones and analytics."""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, status

from fitness_tracker.api.dependencies import (
    PageParams,
    get_container,
    get_current_user,
    get_page_params,
)
from fitness_tracker.api.models import (  # noqa: TC001
    GoalCategory,
    GoalCreate,
    GoalPriority,
    GoalStatus,
    GoalUpdate,
    MilestoneComplete,
    ProgressUpdate,
)
from fitness_tracker.api.serializers import (
    pagination,
    serialize_goal,
    serialize_goal_detail,
    serialize_progress_result,
    to_json,
)
from fitness_tracker.containers import AppContainer  # noqa: TC001
from fitness_tracker.domain.users import UserRecord  # noqa: TC001

router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("")
async def list_goals(  # noqa: PLR0913
    status_filter: GoalStatus | None = Query(default=None, alias="status"),
    category: GoalCategory | None = None,
    priority: GoalPriority | None = None,
    paging: PageParams = Depends(get_page_params),
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's goals, highest priority first."""
    goals, total = container.goal_service.list_goals(
        user.id,
        status=status_filter,
        category=category,
        priority=priority,
        page=paging.page,
        limit=paging.limit,
    )
    return {
        "goals": [serialize_goal(goal) for goal in goals],
        "pagination": pagination(paging.page, paging.limit, total),
    }


@router.get("/analytics/stats")
async def goal_stats(
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return to_json(container.goal_service.get_stats(user.id))


@router.get("/analytics/insights")
async def goal_insights(
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return timeline hints for active goals."""
    return {"insights": to_json(container.goal_service.get_insights(user.id))}


@router.get("/{goal_id}")
async def goal_detail(
    goal_id: UUID,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return serialize_goal_detail(container.goal_service.get_goal(user.id, goal_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_goal(
    body: GoalCreate,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    goal = container.goal_service.create_goal(user.id, body.model_dump())
    return serialize_goal(goal)


@router.put("/{goal_id}")
async def update_goal(
    goal_id: UUID,
    body: GoalUpdate,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Apply a partial edit, including manual status changes."""
    goal = container.goal_service.update_goal(
        user.id, goal_id, body.model_dump(exclude_unset=True)
    )
    return serialize_goal(goal)


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_goal(
    goal_id: UUID,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> None:
    container.goal_service.delete_goal(user.id, goal_id)


@router.post("/{goal_id}/progress")
async def record_progress(
    goal_id: UUID,
    body: ProgressUpdate,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Record an observed value against an active goal."""
    result = container.goal_service.record_progress(
        user.id, goal_id, body.value, notes=body.notes, observed_at=body.date
    )
    return serialize_progress_result(result)


@router.post("/{goal_id}/milestones/{milestone_id}/complete")
async def complete_milestone(
    goal_id: UUID,
    milestone_id: UUID,
    body: MilestoneComplete | None = None,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    goal, milestone = container.goal_service.complete_milestone(
        user.id, goal_id, milestone_id, notes=body.notes if body else None
    )
    return {"goal": serialize_goal(goal), "milestone": to_json(milestone)}
