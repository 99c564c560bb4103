"""FastAPI application factory — entry point for Athenaeum."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes.auth import router as auth_router
from app.api.routes.books import router as books_router
from app.api.routes.intelligence import router as intel_router
from app.api.routes.seats import router as seats_router
from app.api.routes.session import router as session_router
from app.config import settings
from app.sessions import registry

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown events."""
    logger.info("Athenaeum starting up...")
    logger.info("LLM provider: %s", settings.llm_provider.value)
    if not settings.has_llm_credential:
        logger.info("No LLM API key set: recommendations use catalog order")
    logger.info("Seat refresh interval: %.2fs", settings.seat_refresh_interval)
    yield
    await registry.close_all()
    logger.info("Athenaeum shutting down...")


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="Athenaeum",
        description="Library demo with live seats and AI book recommendations",
        version="1.0.0",
        lifespan=lifespan,
    )

    # ── Middleware ──────────────────────────────────
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routes ─────────────────────────────────────
    application.include_router(auth_router)
    application.include_router(session_router)
    application.include_router(books_router)
    application.include_router(seats_router)
    application.include_router(intel_router)

    # ── Health Check ───────────────────────────────
    @application.get("/health", tags=["System"])
    async def health() -> dict[str, str]:
        return {"status": "healthy", "service": "athenaeum"}

    return application


app = create_app()
