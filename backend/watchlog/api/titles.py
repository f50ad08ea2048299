"""
Titles API Router

Endpoints for Title operations.
"""
from typing import Any, Dict, Optional
from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from watchlog.api.responses import envelope
from watchlog.database import get_db
from watchlog.services.aggregate_service import AggregateService
from watchlog.services.reconciliation_service import ReconciliationService
from watchlog.services.replay_event_service import ReplayEventService
from watchlog.services.title_service import TitleService

router = APIRouter(prefix="/api/titles", tags=["titles"])


@router.get("")
async def list_titles(
    status: Optional[str] = Query(None, description="Filter by status"),
    kind: Optional[str] = Query(None, description="Filter by kind (movie, series)"),
    limit: Optional[int] = Query(None, description="Max rows"),
    offset: Optional[int] = Query(None, description="Rows to skip"),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """
    Get titles, most recently updated first.

    - **status**: watching, completed, planned, paused, dropped
    - **kind**: movie or series
    """
    service = TitleService(db)
    return envelope(
        await service.list_titles(status=status, limit=limit, offset=offset, kind=kind)
    )


@router.get("/exists")
async def title_exists(
    title: str = Query(..., description="Display name"),
    external_id: Optional[int] = Query(None, description="Metadata provider id"),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Check whether a title is already in the library."""
    service = TitleService(db)
    return envelope(await service.find_existing(title, external_id))


@router.get("/{title_id}")
async def get_title(title_id: str, db: AsyncSession = Depends(get_db)) -> JSONResponse:
    """
    Get a single title by ID.
    """
    service = TitleService(db)
    return envelope(await service.get_title(title_id))


@router.post("")
async def create_title(
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Add a title to the library."""
    service = TitleService(db)
    return envelope(await service.insert_title(payload), success_status=201)


@router.put("/{title_id}")
async def update_title(
    title_id: str,
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """
    Update a title.

    When a personal rating is included, it is also copied onto the most
    recently recorded replay event of the title (if there is one).
    """
    service = ReconciliationService(db)
    return envelope(await service.update_title_and_sync_latest_event(title_id, payload))


@router.delete("/{title_id}")
async def delete_title(
    title_id: str,
    purge_replay_events: bool = Query(False, description="Also delete its replay events"),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Delete a title."""
    service = ReconciliationService(db)
    return envelope(await service.delete_title(title_id, purge_replay_events))


@router.get("/{title_id}/replay-events")
async def list_title_replay_events(
    title_id: str,
    limit: Optional[int] = Query(None, description="Max rows"),
    offset: Optional[int] = Query(None, description="Rows to skip"),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Replay events of a title, latest watch date first."""
    service = ReplayEventService(db)
    return envelope(await service.list_by_title(title_id, limit=limit, offset=offset))


@router.post("/{title_id}/recalculate")
async def recalculate_title(title_id: str, db: AsyncSession = Depends(get_db)) -> JSONResponse:
    """Recount a title's replay events."""
    service = AggregateService(db)
    return envelope(await service.recalculate(title_id))
