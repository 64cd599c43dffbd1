"""Swap Matching API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SwapMatchingError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Swap services initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from swapmatch.api.error_handlers import register_error_handlers
from swapmatch.api.routes import health, ledger, swaps, users
from swapmatch.config import get_settings
from swapmatch.infrastructure.observability import setup_logging
from swapmatch.services.swap_services import init_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_services(settings)
    logger.info("Swap Matching API started")
    yield
    logger.info("Swap Matching API shutting down")


app = FastAPI(
    title="Swap Matching API", version="0.1.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(swaps.router)
app.include_router(users.router)
app.include_router(ledger.router)

register_error_handlers(app)
