"""Convert domain objects into JSON-ready dictionaries."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from math import ceil
from uuid import UUID

from fitness_tracker.domain.foods import Food
from fitness_tracker.domain.goals import Goal, GoalProgressResult
from fitness_tracker.domain.stats import NutritionSummary
from fitness_tracker.services.goals import progress_percentage, recent_progress


def to_json(value: object) -> object:
    """Recursively turn dataclasses, ids and dates into plain JSON values."""
    if is_dataclass(value) and not isinstance(value, type):
        return {item.name: to_json(getattr(value, item.name)) for item in fields(value)}
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(key): to_json(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [to_json(item) for item in value]
    return value


def pagination(page: int, limit: int, total: int) -> dict[str, int]:
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": ceil(total / limit) if limit else 0,
    }


def serialize_food(food: Food) -> dict[str, object]:
    payload = to_json(food)
    payload["nutrition_per_100g"] = payload.pop("nutrition")
    return payload


def serialize_goal(goal: Goal) -> dict[str, object]:
    """Goal without its full history, plus derived progress."""
    payload = to_json(goal)
    payload.pop("progress_history")
    payload["progress_percentage"] = progress_percentage(goal)
    return payload


def serialize_goal_detail(goal: Goal) -> dict[str, object]:
    payload = serialize_goal(goal)
    payload["recent_progress"] = to_json(recent_progress(goal))
    return payload


def serialize_progress_result(result: GoalProgressResult) -> dict[str, object]:
    return {
        "goal": serialize_goal(result.goal),
        "progress_percentage": result.progress_percentage,
        "completed_milestones": to_json(result.completed_milestones),
        "goal_completed": result.goal_completed,
    }


def serialize_summary(summary: NutritionSummary) -> dict[str, object]:
    payload = to_json(summary)
    payload["top_foods"] = [
        {"food": serialize_food(item.food), "frequency": item.frequency}
        for item in summary.top_foods
    ]
    return payload
