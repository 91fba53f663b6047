"""
Deep Work Planner - Main Application Entry Point

Time-blocking backend: slot catalog, task scheduling and capacity views.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from deepwork import __version__
from deepwork.core.config import get_settings
from deepwork.core.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    settings = get_settings()
    logger.info(f"Starting Deep Work Planner in {settings.ENVIRONMENT} mode...")

    if settings.is_local:
        from deepwork.infrastructure.local.database import init_db

        await init_db()

    yield

    logger.info("Shutting down Deep Work Planner...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Deep Work Planner",
        description="Time-block scheduling for deep-work tasks",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    from deepwork.api import realtime, schedule, slots, tasks, ventures

    app.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])
    app.include_router(ventures.router, prefix="/api/ventures", tags=["ventures"])
    app.include_router(slots.router, prefix="/api/slots", tags=["slots"])
    app.include_router(schedule.router, prefix="/api/schedule", tags=["schedule"])
    app.include_router(realtime.router, prefix="/api/realtime", tags=["realtime"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": __version__,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
