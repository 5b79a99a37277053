"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_sync.config import get_settings
from user_sync.infrastructure.dependencies import get_http_client, get_orchestrator
from user_sync.infrastructure.logging.log_config import setup_logging
from user_sync.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging, run the initial load, close the pool."""
    settings = get_settings()
    setup_logging(settings)

    logger.info(
        "Syncing primary=%s read_only=%s",
        settings.primary_base_url,
        settings.read_only_base_url,
    )
    snapshot = await get_orchestrator().initialize()
    if snapshot.current_error is not None:
        logger.warning("Initial load finished with error: %s", snapshot.current_error.message)

    yield

    await get_http_client().aclose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "user_sync.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
