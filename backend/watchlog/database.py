"""
Database connection and session management

SQLAlchemy 2.0 async style. The Database handle is constructed explicitly
and passed to whoever needs it; nothing here is created at import time.
"""
import logging
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

# Create base class for models
Base = declarative_base()

logger = logging.getLogger("watchlog.database")


def _normalize_url(url: str) -> str:
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return url


class Database:
    """
    Storage handle: one async engine plus its session factory.

    Usage:
        database = Database("sqlite+aiosqlite:///./watchlog.db")
        await database.create_all()
        async with database.session() as session:
            ...
        await database.dispose()
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = _normalize_url(url)

        engine_kwargs = {"echo": echo, "future": True}
        if "sqlite" in self.url:
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in self.url or self.url.endswith("://"):
                # Every session must see the same in-memory database
                engine_kwargs["poolclass"] = StaticPool

        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    def session(self) -> AsyncSession:
        """New session; use as an async context manager"""
        return self.session_factory()

    async def create_all(self) -> None:
        """
        Create tables and indexes.
        Safe to call multiple times - only creates tables that don't exist
        """
        # Import all models to register them with Base
        from watchlog.models import Title, ReplayEvent  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        logger.info(f"Schema ready on {self.engine.url.render_as_string(hide_password=True)}")

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Dependency for getting a database session

    Usage in FastAPI:
        @router.get("/items")
        async def read_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
