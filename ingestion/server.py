"""
Ingestion API Server

FastAPI application exposing the extraction pipeline to the rest of the
application (persistence, auth and storage live elsewhere).

Run with: python -m uvicorn ingestion.server:app --port 5005
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import config, state
from .extractor import ContentExtractor
from .routes import router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup application resources."""
    # Startup - skip if already initialized (e.g., by tests)
    if state.extractor is None:
        logging.basicConfig(level=config.LOG_LEVEL.upper())
        state.extractor = ContentExtractor()
        logger.info(
            f"Extractor initialized (timeout: {config.FETCH_TIMEOUT}s, "
            f"retries: {config.FETCH_MAX_RETRIES}, cache TTL: {config.CACHE_TTL_SECONDS}s)"
        )

    yield

    # Shutdown
    if state.extractor:
        removed = state.extractor.cache.cleanup_expired()
        logger.info(f"Shutting down, dropped {removed} expired cache entries")


app = FastAPI(
    title="Content Ingestion API",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(router)
