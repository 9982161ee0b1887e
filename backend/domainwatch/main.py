"""DomainWatch API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map DomainWatchError → {success: false, ...} responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Missing secrets do not block startup: the trigger reports them per call
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import domainwatch.infrastructure.database as database
from domainwatch.api.error_handlers import register_error_handlers
from domainwatch.api.routes import check_domains, domains, health
from domainwatch.config import get_settings
from domainwatch.infrastructure.database import init_db
from domainwatch.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    missing = settings.missing_required_vars()
    if missing:
        logger.warning(f"Missing required environment variables: {', '.join(missing)}")
    logger.info("DomainWatch API started")
    yield
    logger.info("DomainWatch API shutting down")
    if database.db_manager is not None:
        await database.db_manager.dispose()


app = FastAPI(
    title="DomainWatch API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(check_domains.router)
app.include_router(domains.router)

register_error_handlers(app)
