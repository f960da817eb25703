"""Accountability API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map AccountabilityError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and identity validator initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - No background scheduler: cycle expiry is computed on read, never by a timer
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from accountability.api.error_handlers import register_error_handlers
from accountability.api.routes import auth, goals, health, users
from accountability.config import get_settings
from accountability.infrastructure.database import init_db
from accountability.infrastructure.github_identity import GitHubProfileValidator
from accountability.infrastructure.observability import setup_logging

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
    if settings.database_auto_create:
        await manager.create_all()
        logger.info("Database tables ensured (auto-create)")

    app.state.identity_validator = GitHubProfileValidator(
        base_url=settings.github_api_base_url,
        token=settings.github_api_token,
        timeout_seconds=settings.identity_timeout_seconds,
        max_retries=settings.identity_max_retries,
        base_delay_ms=settings.identity_base_delay_ms,
    )
    logger.info("Accountability API started")
    yield
    logger.info("Accountability API shutting down")
    await app.state.identity_validator.aclose()
    await manager.dispose()


app = FastAPI(
    title="Accountability API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["Content-Type"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(goals.router)

register_error_handlers(app)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("accountability.main:app", host="0.0.0.0", port=8000)
