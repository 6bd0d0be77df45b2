"""
Global middleware — request logging/timing and CORS.
"""

from __future__ import annotations

import logging
import time
from typing import Iterable

from fastapi import FastAPI, Request, Response

from api.errors import unexpected_error_handler

logger = logging.getLogger(__name__)

ALLOW_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
ALLOW_HEADERS = "Origin, X-Requested-With, Content-Type, Accept, Authorization"


def _apply_cors_headers(response: Response, origin: str | None, allowed: frozenset) -> None:
    if origin and origin in allowed:
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Vary"] = "Origin"
    response.headers["Access-Control-Allow-Credentials"] = "true"
    response.headers["Access-Control-Allow-Methods"] = ALLOW_METHODS
    response.headers["Access-Control-Allow-Headers"] = ALLOW_HEADERS


def register_middleware(app: FastAPI, cors_origins: Iterable[str]) -> None:
    """Attach any app-level middleware."""
    allowed = frozenset(cors_origins)

    # Registered first, so it runs innermost: OPTIONS never reaches routing.
    @app.middleware("http")
    async def cors(request: Request, call_next):
        origin = request.headers.get("origin")
        if request.method == "OPTIONS":
            logger.debug("Answering preflight for %s (origin %s)", request.url.path, origin)
            response = Response(status_code=200)
        else:
            try:
                response = await call_next(request)
            except Exception as exc:
                # Mapped here rather than in ServerErrorMiddleware so the 500 keeps its CORS headers.
                response = await unexpected_error_handler(request, exc)
        _apply_cors_headers(response, origin, allowed)
        return response

    @app.middleware("http")
    async def request_timer(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.info(
            "%s %s — %d in %.3fs (origin: %s)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
            request.headers.get("origin"),
        )
        return response
