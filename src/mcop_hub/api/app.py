"""
MCOP Hub relay - FastAPI application.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from mcop_hub import __version__
from mcop_hub.api.routes import router
from mcop_hub.dispatch import get_event_dispatcher

logger = logging.getLogger(__name__)

# Seconds to wait for in-flight deliveries at shutdown
SHUTDOWN_DRAIN_TIMEOUT = 10.0


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting MCOP Hub relay...")
    yield
    remaining = await get_event_dispatcher().drain(timeout=SHUTDOWN_DRAIN_TIMEOUT)
    if remaining:
        logger.warning(f"Shutting down with {remaining} undelivered Hub event(s)")
    logger.info("MCOP Hub relay stopped")


def create_app(title: str = "MCOP Hub relay") -> FastAPI:
    """Create the FastAPI application."""
    app = FastAPI(
        title=title,
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(router)
    return app
