"""
Health & Statistics API Router

Endpoints for database health checks and library statistics.
"""
from datetime import datetime, timezone
from typing import Optional
import time

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from watchlog.api.responses import envelope
from watchlog.database import get_db
from watchlog.models import ReplayEvent, Title
from watchlog.services.statistics_service import StatisticsService

router = APIRouter(tags=["health"])


class DatabaseStats(BaseModel):
    """Database statistics response"""
    status: str
    connected: bool
    response_time_ms: float
    tables: dict
    error: Optional[str] = None


class FullHealthResponse(BaseModel):
    """Complete health check response"""
    status: str
    timestamp: datetime
    database: DatabaseStats
    api_version: str


@router.get("/health")
async def health_check() -> dict:
    """Liveness check."""
    return {"status": "healthy"}


@router.get("/api/health/db", response_model=FullHealthResponse)
async def check_database_health(
    request: Request, db: AsyncSession = Depends(get_db)
) -> FullHealthResponse:
    """
    Database health check.

    Returns connection status, response time and table row counts.
    """
    start_time = time.time()
    tables_stats = {}
    error = None

    try:
        await db.execute(text("SELECT 1"))
        connected = True
        tables_stats = {
            "titles": await db.scalar(select(func.count(Title.id))) or 0,
            "replay_events": await db.scalar(select(func.count(ReplayEvent.id))) or 0,
        }
    except SQLAlchemyError as e:
        connected = False
        error = str(e)

    response_time = (time.time() - start_time) * 1000  # Convert to ms

    return FullHealthResponse(
        status="healthy" if connected else "unhealthy",
        timestamp=datetime.now(timezone.utc),
        database=DatabaseStats(
            status="connected" if connected else "disconnected",
            connected=connected,
            response_time_ms=round(response_time, 2),
            tables=tables_stats,
            error=error,
        ),
        api_version=request.app.version,
    )


@router.get("/api/statistics")
async def library_statistics(db: AsyncSession = Depends(get_db)) -> JSONResponse:
    """Counts per status and kind, total watch time and average rating."""
    service = StatisticsService(db)
    return envelope(await service.summary())
