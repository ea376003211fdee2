"""Tests for container wiring."""

from fitness_tracker.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.settings is settings
    assert container.goal_service is not None
    assert container.goal_service.notification_service is (
        container.notification_service
    )
    assert container.stats_service.repository is (
        container.nutrition_entry_service.repository
    )
    assert container.progress_service.repository.client is (
        container.goal_service.repository.client
    )
