"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from fitness_tracker.api.tracking import router as tracking_router
from fitness_tracker.app_logging import configure_logging
from fitness_tracker.containers import AppContainer
from fitness_tracker.domain.logs import ReferenceItem


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to close store connections")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(tracking_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/activity-levels")
    async def activity_levels(request: Request) -> list[dict[str, object]]:
        """Return the activity levels used by the goal calculator."""
        state_container: AppContainer = request.app.state.container
        return _serialize_reference(state_container.reference_service.activity_levels())

    @app.get("/goals")
    async def goals(request: Request) -> list[dict[str, object]]:
        """Return the weight goals."""
        state_container: AppContainer = request.app.state.container
        return _serialize_reference(state_container.reference_service.goals())

    @app.get("/meal-types")
    async def meal_types(request: Request) -> list[dict[str, object]]:
        """Return the meal types."""
        state_container: AppContainer = request.app.state.container
        return _serialize_reference(state_container.reference_service.meal_types())

    return app


def _serialize_reference(items: list[ReferenceItem]) -> list[dict[str, object]]:
    return [{"id": item.id, "name": item.name} for item in items]
