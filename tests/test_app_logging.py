"""Tests for logging configuration."""

import logging

from fitness_tracker.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("fitness_tracker")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1


def test_configure_logging_applies_level() -> None:
    logger = configure_logging("debug")

    assert logger.name == "fitness_tracker"
    assert logger.level == logging.DEBUG
    assert logger.propagate is False

    configure_logging("WARNING")
    assert logger.level == logging.WARNING
