"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from route_elevation.config import Settings
from route_elevation.elevation.routes import router
from route_elevation.elevation.service import ElevationService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown.

    Builds the provider chain from the environment on startup and closes
    the providers' HTTP sessions on teardown.
    """
    settings = Settings.from_env()
    service = ElevationService(settings)
    app.state.elevation_service = service
    logger.info(
        "Elevation service initialized",
        extra={"providers": [provider.name for provider in service.providers]},
    )
    yield
    service.shutdown()
    logger.info("Elevation service shut down")


app = FastAPI(title="Route Elevation API", lifespan=lifespan)
app.include_router(router)
