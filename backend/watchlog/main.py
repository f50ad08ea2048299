"""
Watchlog API

FastAPI application over the title and replay-event services.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from watchlog.config import Settings, get_settings
from watchlog.database import Database
from watchlog.api import (
    titles_router,
    replay_events_router,
    health_router,
)


def configure_logging(level: str = "INFO") -> None:
    """Root logging setup; call once at process start."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(
    database: Optional[Database] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        database: storage handle to serve; built from settings when omitted
        settings: configuration; get_settings() when omitted
    """
    settings = settings or get_settings()
    database = database or Database(settings.database_url, echo=settings.debug)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup/shutdown events."""
        await database.create_all()
        yield
        await database.dispose()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
        Watchlog API

        Personal catalog of watched titles:
        - **Titles**: movies and series with progress, rating and notes
        - **Replay events**: each recorded viewing of a title
        """,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.database = database

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(titles_router)
    app.include_router(replay_events_router)
    app.include_router(health_router)

    @app.get("/", tags=["health"])
    def root():
        """Root endpoint returning API info."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
            "redoc": "/redoc",
        }

    return app


def build_app() -> FastAPI:
    """Entry point for ASGI servers: `uvicorn --factory watchlog.main:build_app`"""
    settings = get_settings()
    configure_logging(settings.log_level)
    return create_app(settings=settings)
