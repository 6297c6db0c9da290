"""Fundboard API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map FundboardError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and commerce client created on startup, released on shutdown

Design Decisions:
    - Lifespan context manager over @app.on_event
    - SQLite URLs get their schema created on startup; PostgreSQL uses alembic
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import fundboard.models  # noqa: F401
from fundboard.api.error_handlers import register_error_handlers
from fundboard.api.routes import (
    commerce_auth, commerce_data, env_check, health, items, metrics, storage,
)
from fundboard.config import get_settings
from fundboard.infrastructure.commerce_client import CommerceClient
from fundboard.infrastructure.database import init_db
from fundboard.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_url.startswith("sqlite"):
        await manager.create_schema()
    app.state.commerce_client = CommerceClient(
        api_key=settings.shopify_api_key,
        api_secret=settings.shopify_api_secret,
        api_version=settings.shopify_api_version,
        timeout_seconds=settings.shopify_timeout_seconds,
    )
    logger.info("Fundboard API started")
    yield
    logger.info("Fundboard API shutting down")
    await app.state.commerce_client.aclose()
    await manager.dispose()


app = FastAPI(title="Fundboard API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(env_check.router)
app.include_router(commerce_auth.router)
app.include_router(commerce_data.router)
app.include_router(items.router)
app.include_router(storage.router)
app.include_router(metrics.router)

register_error_handlers(app)
