# src/civic_commons/main.py
"""Main entry point for the Civic Commons application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from civic_commons.api import (
    analytics_router,
    auth_router,
    events_router,
    forums_router,
    news_router,
    petitions_router,
    posts_router,
    representatives_router,
    search_router,
)
from civic_commons.api.errors import setup_error_handlers
from civic_commons.core.logging import configure_logging
from civic_commons.core.settings import settings
from civic_commons.services.news import NewsIngestionWorker, NewsService
from civic_commons.storage.sql import session_scope

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

API_DESCRIPTION = "Civic engagement platform: forums, events, petitions and local news"

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description=API_DESCRIPTION,
    version=settings.app_version,
    debug=settings.debug,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

setup_error_handlers(app)

# Include API routers
app.include_router(auth_router, prefix="/api")
app.include_router(forums_router, prefix="/api")
app.include_router(posts_router, prefix="/api")
app.include_router(search_router, prefix="/api")
app.include_router(events_router, prefix="/api")
app.include_router(petitions_router, prefix="/api")
app.include_router(representatives_router, prefix="/api")
app.include_router(news_router, prefix="/api")
app.include_router(analytics_router, prefix="/api")


@app.on_event("startup")
async def on_startup() -> None:
    if settings.news_ingestion_enabled:
        worker = NewsIngestionWorker(NewsService(session_scope))
        await worker.start()
        app.state.news_worker = worker
        logger.info("News ingestion enabled every %.0f seconds", worker.interval)
    else:
        app.state.news_worker = None


@app.on_event("shutdown")
async def on_shutdown() -> None:
    worker: NewsIngestionWorker | None = getattr(app.state, "news_worker", None)
    if worker:
        await worker.stop()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": API_DESCRIPTION,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("civic_commons.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
