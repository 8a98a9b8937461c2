"""SeePaw API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SeePawError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and the activity-completion sweep start in the lifespan and stop with it

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Three error handler layers live in api/error_handlers.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from seepaw.api.error_handlers import register_error_handlers
from seepaw.api.routes import (
    activities, animals, breeds, favorites, fosterings, health, notifications,
    ownership_requests, ownerships, shelters, users,
)
from seepaw.config import get_settings
from seepaw.infrastructure import database
from seepaw.infrastructure.activity_completion import ActivityCompletionScheduler
from seepaw.infrastructure.database import init_db
from seepaw.infrastructure.observability import setup_logging

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
    scheduler = ActivityCompletionScheduler(database.db_manager.session, settings)
    scheduler.start()
    logger.info("SeePaw API started")
    yield
    await scheduler.stop()
    await database.db_manager.dispose()
    logger.info("SeePaw API shutting down")


app = FastAPI(title="SeePaw API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(animals.router)
app.include_router(breeds.router)
app.include_router(shelters.router)
app.include_router(ownership_requests.router)
app.include_router(ownerships.router)
app.include_router(activities.router)
app.include_router(fosterings.router)
app.include_router(favorites.router)
app.include_router(notifications.router)
app.include_router(users.router)

register_error_handlers(app)
