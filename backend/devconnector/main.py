"""DevConnector API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map DevConnectorError → {"msg"} / {"errors"} JSON bodies
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan, before the first request is served

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Static SPA build mounted last so /api/* always wins
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from devconnector.api.error_handlers import register_error_handlers
from devconnector.api.routes import auth, health, posts, profile, users
from devconnector.config import get_settings
from devconnector.infrastructure import database
from devconnector.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("DevConnector API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("DevConnector API shutting down")


app = FastAPI(
    title="DevConnector API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(posts.router)

register_error_handlers(app)

# html=True enables SPA fallback (serves index.html for unknown routes)
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")
