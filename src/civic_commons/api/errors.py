"""Exception handlers mapping domain errors onto JSON responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from civic_commons.core.errors import CivicError, UnauthorizedError

logger = logging.getLogger(__name__)


def setup_error_handlers(app: FastAPI) -> None:
    """Register the domain and catch-all exception handlers on ``app``."""

    @app.exception_handler(CivicError)
    async def civic_error_handler(request: Request, exc: CivicError) -> JSONResponse:
        """Translate a domain error into its HTTP status with a ``detail`` message."""
        logger.debug(
            "%s %s failed with %s: %s",
            request.method,
            request.url.path,
            type(exc).__name__,
            exc,
        )
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": str(exc)},
            headers=headers,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )
