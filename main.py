"""
Phonebook API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from api.contacts import router as contacts_router
from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.routes import router as health_router
from auth.jwt import TokenService
from auth.routes import router as auth_router
from config.settings import Settings, get_settings
from database.session import (
    create_engine_from_settings,
    create_session_factory,
    create_tables,
    enable_sqlite_foreign_keys,
)

logger = logging.getLogger(__name__)

ENDPOINTS = (
    ("POST", "/users/signup"),
    ("POST", "/users/login"),
    ("POST", "/users/logout"),
    ("GET", "/users/current"),
    ("GET", "/contacts"),
    ("POST", "/contacts"),
    ("DELETE", "/contacts/{id}"),
)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("asyncio", "sqlalchemy.engine"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[AsyncEngine] = None,
) -> FastAPI:
    """
    Build the application around explicit configuration.

    ``engine`` defaults to one built from ``settings``; tests pass an
    in-memory SQLite engine instead.
    """
    settings = settings or get_settings()
    configure_logging(settings.debug)
    engine = engine or create_engine_from_settings(settings)
    enable_sqlite_foreign_keys(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # A store we cannot reach is fatal: the exception stops startup.
        await create_tables(engine)
        if not settings.jwt_secret:
            logger.warning("JWT_SECRET is not set; signup and login will fail")
        logger.info("Available endpoints:")
        for method, path in ENDPOINTS:
            logger.info("- %-6s %s", method, path)
        logger.info("Application ready to accept requests.")
        yield
        await engine.dispose()

    app = FastAPI(
        title="Phonebook API",
        version="1.0.0",
        description="User accounts and per-user contact lists.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.token_service = TokenService(
        settings.jwt_secret,
        expiry_seconds=settings.jwt_expiry_seconds,
    )

    register_exception_handlers(app)
    register_middleware(app, settings.cors_origins)

    # Routes
    app.include_router(health_router)
    app.include_router(auth_router, prefix="/users")
    app.include_router(contacts_router, prefix="/contacts")

    return app


if __name__ == "__main__":
    config = get_settings()
    uvicorn.run(
        "main:create_app",
        factory=True,
        reload=config.debug,
        host=config.host,
        port=config.port,
        log_level="debug" if config.debug else "info",
    )
