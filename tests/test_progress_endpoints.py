"""Tests for body progress endpoints."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from fastapi.testclient import TestClient

from fitness_tracker.api.app import create_app
from tests.conftest import (
    OTHER_TOKEN,
    InMemoryProgressRepository,
    InMemoryUserRepository,
    make_progress,
)


def test_progress_entry_lifecycle(container, auth_headers) -> None:
    client = TestClient(create_app(container))

    created = client.post(
        "/progress/entries",
        headers=auth_headers,
        json={
            "type": "body-measurements",
            "date": "2026-06-01T07:30:00",
            "data": {"waist": 84, "chest": 101},
            "notes": "fasted",
        },
    )
    entry = created.json()
    path = f"/progress/entries/{entry['id']}"
    updated = client.put(path, headers=auth_headers, json={"data": {"waist": 83}})

    assert created.status_code == 201
    assert entry["date"] == "2026-06-01T07:30:00+00:00"
    assert updated.status_code == 200
    assert updated.json()["data"] == {"waist": 83, "chest": 101}
    assert updated.json()["notes"] == "fasted"
    assert client.get(path, headers=auth_headers).json()["data"]["waist"] == 83
    assert client.delete(path, headers=auth_headers).status_code == 204
    assert client.get(path, headers=auth_headers).status_code == 404


def test_create_entry_rejects_invalid_data(container, auth_headers) -> None:
    client = TestClient(create_app(container))

    missing = client.post(
        "/progress/entries",
        headers=auth_headers,
        json={"type": "weight", "data": {"unit": "kg"}},
    )
    unknown_type = client.post(
        "/progress/entries",
        headers=auth_headers,
        json={"type": "mood", "data": {"weight": 80}},
    )

    assert missing.status_code == 400
    assert missing.json() == {"error": "Valid weight is required"}
    assert unknown_type.status_code == 422


def test_list_entries_filters_by_type(
    container,
    user,
    auth_headers,
    progress_repository: InMemoryProgressRepository,
) -> None:
    client = TestClient(create_app(container))
    now = datetime.now(tz=UTC)
    for days in (1, 2, 3):
        progress_repository.add(
            make_progress(user.id, "weight", now - timedelta(days=days), weight=80)
        )
    progress_repository.add(
        make_progress(user.id, "body-measurements", now, waist=84)
    )

    response = client.get(
        "/progress/entries",
        headers=auth_headers,
        params={"type": "weight", "limit": 2},
    )

    body = response.json()
    assert [entry["type"] for entry in body["entries"]] == ["weight", "weight"]
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}


def test_other_users_entry_is_not_found(
    container,
    user,
    auth_headers,
    user_repository: InMemoryUserRepository,
    progress_repository: InMemoryProgressRepository,
) -> None:
    client = TestClient(create_app(container))
    entry = progress_repository.add(
        make_progress(user.id, "weight", datetime.now(tz=UTC), weight=80)
    )
    user_repository.add_user(OTHER_TOKEN, username="other")
    other_headers = {"Authorization": f"Bearer {OTHER_TOKEN}"}

    response = client.get(f"/progress/entries/{entry.id}", headers=other_headers)

    assert response.status_code == 404
    assert response.json() == {"error": "Progress entry not found"}
    missing = client.delete(f"/progress/entries/{uuid4()}", headers=auth_headers)
    assert missing.status_code == 404


def test_progress_analytics_endpoints(
    container,
    user,
    auth_headers,
    progress_repository: InMemoryProgressRepository,
) -> None:
    client = TestClient(create_app(container))
    now = datetime.now(tz=UTC)
    progress_repository.add(
        make_progress(user.id, "weight", now - timedelta(days=10), weight=82)
    )
    progress_repository.add(
        make_progress(user.id, "weight", now - timedelta(days=1), weight=80)
    )
    progress_repository.add(
        make_progress(
            user.id, "body-measurements", now - timedelta(days=2), waist=84
        )
    )
    progress_repository.add(
        make_progress(
            user.id,
            "performance",
            now - timedelta(days=3),
            exercise="Deadlift",
            value=140,
        )
    )

    weight = client.get("/progress/analytics/weight", headers=auth_headers).json()
    measurements = client.get(
        "/progress/analytics/measurements",
        headers=auth_headers,
        params={"measurement": "waist"},
    ).json()
    performance = client.get(
        "/progress/analytics/performance", headers=auth_headers
    ).json()
    summary = client.get("/progress/summary", headers=auth_headers).json()

    assert weight["direction"] == "decreasing"
    assert weight["change"] == -2
    assert weight["total_entries"] == 2
    assert list(measurements["measurements"]) == ["waist"]
    assert performance["exercises"]["Deadlift"]["best"] == 140
    assert performance["exercises"]["Deadlift"]["unit"] == "reps"
    assert summary["total_entries"] == 4
    assert summary["by_type"]["weight"]["count"] == 2
    assert summary["weight_direction"] == "decreasing"


def test_progress_analytics_validates_query(container, auth_headers) -> None:
    client = TestClient(create_app(container))

    bad_period = client.get(
        "/progress/analytics/weight", headers=auth_headers, params={"period": "2w"}
    )
    bad_measurement = client.get(
        "/progress/analytics/measurements",
        headers=auth_headers,
        params={"measurement": "biceps"},
    )
    inverted = client.get(
        "/progress/analytics/weight",
        headers=auth_headers,
        params={
            "start_date": "2026-06-30T00:00:00",
            "end_date": "2026-06-01T00:00:00",
        },
    )

    assert bad_period.status_code == 422
    assert bad_measurement.status_code == 422
    assert inverted.status_code == 400
