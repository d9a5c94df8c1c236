"""Contact Card API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CardShareError → structured JSON responses
    - CORS configured from settings (not hardcoded); credentials allowed for the session cookie
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: cleaner startup/shutdown pairing
    - Error handlers live in api/error_handlers.py and are registered once here
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import auth, cards, health, profiles
from app.config import get_settings
from app.infrastructure.database import init_db
from app.infrastructure.observability import setup_logging

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
    logger.info("Contact Card API started")
    yield
    logger.info("Contact Card API shutting down")


app = FastAPI(
    title="Contact Card API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(cards.router)
app.include_router(profiles.router)

register_error_handlers(app)
