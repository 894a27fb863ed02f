"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers, routes, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.memory import InMemoryRegistrationRepository
from src.adapters.repository.postgres import PostgresRegistrationRepository, run_migrations
from src.api.errors import register_exception_handlers
from src.api.routes import router as form_router
from src.api.v1 import router as v1_router
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "form",
        "description": "HTML registration form",
    },
    {
        "name": "v1",
        "description": "Registration API v1 - Register a person by name and email",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates the registration repository for the configured backend
    - Creates database connection pool and runs migrations (postgres backend)
    - Closes connection pool on shutdown
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    logger.info("Starting application...")

    pool: ConnectionPool | None = None
    if settings.storage_backend == "memory":
        logger.info("Using in-memory registration storage")
        app.state.repository = InMemoryRegistrationRepository()
    else:
        logger.info("Connecting to database...")

        # Create connection pool with explicit sizing
        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )

        logger.info("Running database migrations...")
        run_migrations(pool)

        app.state.repository = PostgresRegistrationRepository(pool)

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="registration-form",
    description="Registration capture form with salted-hash duplicate email detection",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

register_exception_handlers(app)

app.include_router(form_router)
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with storage validation.

    Returns 200 OK if application and storage are healthy.
    Storage failures surface as 503 via the exception handler.
    """
    request.app.state.repository.check_health()
    return {"status": "healthy"}
