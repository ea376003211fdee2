"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from fitness_tracker.api.goals import router as goals_router
from fitness_tracker.api.notifications import router as notifications_router
from fitness_tracker.api.nutrition import router as nutrition_router
from fitness_tracker.api.progress import router as progress_router
from fitness_tracker.api.users import router as users_router
from fitness_tracker.app_logging import configure_logging
from fitness_tracker.containers import AppContainer
from fitness_tracker.services.errors import (
    AccessDeniedError,
    ConflictError,
    FitnessTrackerError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
    ReferenceNotFoundError,
)

_STATUS_BY_ERROR: dict[type[FitnessTrackerError], int] = {
    ReferenceNotFoundError: status.HTTP_400_BAD_REQUEST,
    InvalidStateError: status.HTTP_400_BAD_REQUEST,
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    AccessDeniedError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Fitness Tracker")
    app.state.container = container

    app.include_router(users_router)
    app.include_router(nutrition_router)
    app.include_router(goals_router)
    app.include_router(progress_router)
    app.include_router(notifications_router)

    @app.exception_handler(FitnessTrackerError)
    async def handle_service_error(
        request: Request, exc: FitnessTrackerError
    ) -> JSONResponse:
        status_code = error_status(exc)
        logger.info(
            "Request rejected: %s %s -> %s (%s)",
            request.method,
            request.url.path,
            status_code,
            exc.message,
        )
        return JSONResponse(status_code=status_code, content={"error": exc.message})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def error_status(exc: FitnessTrackerError) -> int:
    """Return the HTTP status for a service error, walking its class hierarchy."""
    for cls in type(exc).__mro__:
        if cls in _STATUS_BY_ERROR:
            return _STATUS_BY_ERROR[cls]
    return status.HTTP_400_BAD_REQUEST
