"""Feedline API — FastAPI application assembly.

Invariants:
    - Routers are included explicitly, in the order their prefixes are documented
    - Error handlers registered before the first request: every failure leaves
      through the one JSON envelope
    - The session manager exists only between lifespan startup and shutdown

Design Decisions:
    - Lifespan context manager, no @app.on_event hooks
    - Settings read once at import for middleware (CORS), again in lifespan for
      logging and storage; get_settings() is cached so both see the same object
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from feedline.api.error_handlers import register_error_handlers
from feedline.api.routes import auth, feed, health, messages, users
from feedline.config import get_settings
from feedline.infrastructure.database import close_db, init_db
from feedline.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_settings()
    setup_logging(config.log_level, config.log_format)
    init_db(
        config.database_url,
        pool_size=config.database_pool_size,
        max_overflow=config.database_max_overflow,
    )
    logger.info(f"Feedline API {health.API_VERSION} ready")
    try:
        yield
    finally:
        await close_db()
        logger.info("Feedline API stopped")


def create_app() -> FastAPI:
    config = get_settings()
    application = FastAPI(
        title="Feedline API", version=health.API_VERSION, lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    for module in (health, auth, users, messages, feed):
        application.include_router(module.router)
    register_error_handlers(application)
    return application


app = create_app()
