"""
Application entry point for the registration API.

Startup validates configuration before anything else: a missing
REGISTRATION_SECRET aborts the process here rather than on the first
signed link. The lifespan then opens the PostgreSQL pool, applies
migrations and attaches the configured key-value store and email sender
to app.state, where src.api.dependencies picks them up per request.

Run with: uvicorn src.api.main:app
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import run_migrations
from src.api.dependencies import build_email_sender, build_keystore
from src.api.v1 import router as v1_router
from src.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

tags_metadata = [
    {
        "name": "v1",
        "description": "Verify an email address or roll number, then create the account",
    },
]


def open_pool(settings: Settings) -> ConnectionPool:
    """Open the connection pool shared by accounts and the postgres keystore."""
    logger.info(
        "Opening database pool (min=%d, max=%d)",
        settings.pool_min_size,
        settings.pool_max_size,
    )
    return ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings = get_settings()

    pool = open_pool(settings)
    run_migrations(pool)

    app.state.pool = pool
    app.state.keystore = build_keystore(settings, pool)
    app.state.email_sender = build_email_sender(settings)
    app.state.keystore_backend = settings.keystore_backend

    logger.info(
        "Registration API ready (keystore=%s, email=%s, mail_domain=%s)",
        settings.keystore_backend,
        settings.email_backend,
        settings.mail_domain,
    )
    try:
        yield
    finally:
        pool.close()
        logger.info("Database pool closed")


app = FastAPI(
    title="anant-registration",
    description="Registration API with one-time code and signed-link identity verification",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

app.include_router(v1_router, prefix="/v1")


@app.get("/health")
def health_check(request: Request) -> dict[str, str]:
    """Report liveness after a round trip to the account database."""
    with request.app.state.pool.connection() as conn:
        conn.execute("SELECT 1")

    return {
        "status": "healthy",
        "keystore": getattr(request.app.state, "keystore_backend", "unknown"),
    }
