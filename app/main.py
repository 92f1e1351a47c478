"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler owning the scheduler."""
    # Startup
    from app.db.session import async_session_maker, init_db
    from app.services import FlussonicClient, SchedulerService

    await init_db()

    # Setup telemetry
    from app.core.telemetry import setup_all_instrumentation

    setup_all_instrumentation(app)

    scheduler = SchedulerService(async_session_maker, FlussonicClient())
    app.state.scheduler = scheduler
    if settings.SCHEDULER_AUTOSTART:
        await scheduler.start()

    yield

    # Shutdown
    await scheduler.stop()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Playout Scheduler API",
        description="Schedules playlists onto Flussonic streams",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url="/api/redoc" if settings.DEBUG else None,
        openapi_url="/api/openapi.json" if settings.DEBUG else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.DEBUG else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routes
    from app.api.v1.router import api_router

    app.include_router(api_router, prefix="/api/v1")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
