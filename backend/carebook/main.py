"""CareBook API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CareBookError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Store loaded (or seeded) on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py to keep this module's imports small
    - Final save on shutdown only when autosave is on: a store that failed to
      load must not overwrite the file it failed to read
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from carebook.api.error_handlers import register_error_handlers
from carebook.api.routes import caregivers, commands, health, relationships, seniors
from carebook.config import get_settings
from carebook.infrastructure.observability import setup_logging
from carebook.infrastructure.store_manager import init_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_store(
        settings.data_file_path,
        seed_sample_data=settings.seed_sample_data,
        autosave=settings.autosave,
    )
    logger.info("CareBook API started", extra={"path": settings.data_file_path})
    yield
    if manager.autosave:
        manager.save()
    logger.info("CareBook API shutting down")


app = FastAPI(
    title="CareBook API", version="1.0.0", lifespan=lifespan,
)

# CORS: configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(seniors.router)
app.include_router(caregivers.router)
app.include_router(relationships.router)
app.include_router(commands.router)

register_error_handlers(app)
