"""FastAPI application entry point for Referent."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from referent import __version__
from referent.api.routes import router
from referent.config import get_settings
from referent.utils.logging import get_logger, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger = get_logger(__name__)
    logger.info(
        "Referent starting",
        version=__version__,
        text_provider=settings.text_provider,
        image_models=len(settings.image_models),
    )
    yield
    logger.info("Referent shutting down")


app = FastAPI(
    title="Referent",
    description="Extracts web articles and turns them into summaries, theses, posts and illustrations",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic info."""
    return {
        "name": "Referent",
        "version": __version__,
        "docs": "/docs",
    }
