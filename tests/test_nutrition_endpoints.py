"""Tests for nutrition and food endpoints."""

from uuid import uuid4

from fastapi.testclient import TestClient

from fitness_tracker.api.app import create_app
from tests.conftest import (
    OTHER_TOKEN,
    InMemoryFoodRepository,
    InMemoryNutritionEntryRepository,
    InMemoryUserRepository,
    make_food,
)


def test_health_needs_no_token(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_requests_without_valid_token_are_rejected(container, user) -> None:
    client = TestClient(create_app(container))

    assert client.get("/users/me").status_code == 401
    response = client.get("/users/me", headers={"Authorization": "Bearer wrong"})
    assert response.status_code == 401
    response = client.get("/users/me", headers={"Authorization": "Basic abc"})
    assert response.status_code == 401


def test_current_user(container, user, auth_headers) -> None:
    client = TestClient(create_app(container))

    response = client.get("/users/me", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["id"] == str(user.id)
    assert response.json()["username"] == "tester"


def test_log_entry_computes_totals(
    container,
    auth_headers,
    food_repository: InMemoryFoodRepository,
) -> None:
    client = TestClient(create_app(container))
    oats = food_repository.add(
        make_food("Oats", calories=389, protein=16.9, carbohydrates=66.3, fat=6.9)
    )
    milk = food_repository.add(
        make_food("Milk", calories=42, protein=3.4, carbohydrates=5, fat=1)
    )

    response = client.post(
        "/nutrition/entries",
        headers=auth_headers,
        json={
            "date": "2026-05-01",
            "meals": [
                {
                    "type": "breakfast",
                    "foods": [
                        {"food": str(oats.id), "quantity": 50},
                        {"food": str(milk.id), "quantity": 200, "unit": "ml"},
                    ],
                }
            ],
            "water_intake": {"amount": 750},
        },
    )

    assert response.status_code == 201
    body = response.json()
    meal = body["meals"][0]
    assert [line["calories"] for line in meal["foods"]] == [195, 84]
    assert meal["foods"][1]["unit"] == "ml"
    assert meal["total_calories"] == 279
    assert body["daily_totals"]["calories"] == 279
    assert body["daily_totals"]["protein"] == 15.3
    assert body["water_intake"] == {"amount": 750, "unit": "ml"}

    fetched = client.get("/nutrition/entries/2026-05-01", headers=auth_headers)
    assert fetched.status_code == 200
    assert fetched.json()["id"] == body["id"]


def test_log_entry_with_unknown_food_is_rejected(
    container,
    auth_headers,
    entry_repository: InMemoryNutritionEntryRepository,
) -> None:
    client = TestClient(create_app(container))
    missing = uuid4()

    response = client.post(
        "/nutrition/entries",
        headers=auth_headers,
        json={
            "date": "2026-05-01",
            "meals": [
                {"type": "lunch", "foods": [{"food": str(missing), "quantity": 1}]}
            ],
        },
    )

    assert response.status_code == 400
    assert response.json() == {"error": f"Food with ID {missing} not found"}
    assert entry_repository.entries == {}


def test_log_entry_validates_payload(container, auth_headers) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/nutrition/entries",
        headers=auth_headers,
        json={
            "date": "2026-05-01",
            "meals": [
                {"type": "brunch", "foods": [{"food": str(uuid4()), "quantity": 0}]}
            ],
        },
    )

    assert response.status_code == 422


def test_missing_entry_returns_404(container, auth_headers) -> None:
    client = TestClient(create_app(container))

    response = client.get("/nutrition/entries/2026-05-02", headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"error": "No nutrition entry found for this date"}


def test_list_entries_paginates(
    container,
    auth_headers,
    food_repository: InMemoryFoodRepository,
) -> None:
    client = TestClient(create_app(container))
    food = food_repository.add(make_food())
    for day in ("2026-05-01", "2026-05-02", "2026-05-03"):
        client.post(
            "/nutrition/entries",
            headers=auth_headers,
            json={
                "date": day,
                "meals": [
                    {
                        "type": "snack",
                        "foods": [{"food": str(food.id), "quantity": 10}],
                    }
                ],
            },
        )

    response = client.get(
        "/nutrition/entries", headers=auth_headers, params={"limit": 2, "page": 2}
    )

    assert response.status_code == 200
    body = response.json()
    assert [entry["date"] for entry in body["entries"]] == ["2026-05-01"]
    assert body["pagination"] == {"page": 2, "limit": 2, "total": 3, "pages": 2}


def test_food_search_and_custom_food_visibility(
    container,
    auth_headers,
    user_repository: InMemoryUserRepository,
    food_repository: InMemoryFoodRepository,
) -> None:
    client = TestClient(create_app(container))
    food_repository.add(make_food("Apple", verified=True))
    user_repository.add_user(OTHER_TOKEN, username="other")
    other_headers = {"Authorization": f"Bearer {OTHER_TOKEN}"}

    created = client.post(
        "/nutrition/foods",
        headers=auth_headers,
        json={
            "name": "Shake",
            "barcode": "12345678",
            "category": "supplements",
            "nutrition_per_100g": {
                "calories": 120,
                "protein": 24,
                "carbohydrates": 3,
                "fat": 1.5,
            },
            "serving_sizes": [{"name": "scoop", "weight": 30}],
        },
    )

    assert created.status_code == 201
    food = created.json()
    assert food["is_custom"] is True
    assert food["verified"] is False
    assert food["nutrition_per_100g"]["protein"] == 24

    own = client.get("/nutrition/foods", headers=auth_headers).json()
    theirs = client.get("/nutrition/foods", headers=other_headers).json()
    assert [item["name"] for item in own["foods"]] == ["Apple", "Shake"]
    assert [item["name"] for item in theirs["foods"]] == ["Apple"]

    path = f"/nutrition/foods/{food['id']}"
    assert client.get(path, headers=auth_headers).status_code == 200
    denied = client.get(path, headers=other_headers)
    assert denied.status_code == 403
    assert denied.json() == {"error": "Access denied"}

    duplicate = client.post(
        "/nutrition/foods",
        headers=other_headers,
        json={
            "name": "Copy",
            "barcode": "12345678",
            "category": "other",
            "nutrition_per_100g": {
                "calories": 1,
                "protein": 0,
                "carbohydrates": 0,
                "fat": 0,
            },
        },
    )
    assert duplicate.status_code == 409


def test_page_size_is_capped(container, auth_headers) -> None:
    client = TestClient(create_app(container))

    response = client.get(
        "/nutrition/foods", headers=auth_headers, params={"limit": 1000}
    )

    assert response.status_code == 200
    assert response.json()["pagination"]["limit"] == 100


def test_nutrition_analytics(
    container,
    auth_headers,
    food_repository: InMemoryFoodRepository,
) -> None:
    client = TestClient(create_app(container))
    food = food_repository.add(make_food("Rice", calories=130))
    client.post(
        "/nutrition/entries",
        headers=auth_headers,
        json={
            "date": "2026-05-01",
            "meals": [
                {"type": "dinner", "foods": [{"food": str(food.id), "quantity": 200}]}
            ],
        },
    )

    response = client.get(
        "/nutrition/analytics",
        headers=auth_headers,
        params={"start_date": "2026-04-01", "end_date": "2026-05-31"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["total_days"] == 1
    assert body["average_calories"] == 260
    assert body["meal_distribution"]["dinner"] == 1
    assert body["top_foods"][0]["food"]["name"] == "Rice"
    assert body["top_foods"][0]["frequency"] == 1

    inverted = client.get(
        "/nutrition/analytics",
        headers=auth_headers,
        params={"start_date": "2026-06-01", "end_date": "2026-05-31"},
    )
    assert inverted.status_code == 400
