"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from fitcore.api.ledger import router as ledger_router
from fitcore.app_logging import configure_logging
from fitcore.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        scheduler = app.state.container.rollover_scheduler
        try:
            scheduler.start()
        except Exception:
            logger.exception("Failed to start the midnight rollover scheduler")
        yield
        scheduler.shutdown()
        await app.state.container.close_resources()

    app = FastAPI(title="FitCore Ledger", lifespan=lifespan)
    app.state.container = container

    app.include_router(ledger_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
