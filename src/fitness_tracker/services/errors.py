"""Errors raised by application services."""


class FitnessTrackerError(Exception):
    """Base class for errors surfaced to API callers."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ReferenceNotFoundError(FitnessTrackerError):
    """A referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} with ID {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class NotFoundError(FitnessTrackerError):
    """Target entity is missing or not owned by the caller."""


class InvalidStateError(FitnessTrackerError):
    """Entity status forbids the requested operation."""


class InvalidInputError(FitnessTrackerError):
    """Input failed a domain-level validation."""


class AccessDeniedError(FitnessTrackerError):
    """Caller may not access the entity."""


class ConflictError(FitnessTrackerError):
    """Entity conflicts with an existing one."""
