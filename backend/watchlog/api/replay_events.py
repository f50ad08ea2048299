"""
Replay Events API Router

Endpoints for Replay Event operations.
"""
from typing import Any, Dict, Optional
from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from watchlog.api.responses import envelope
from watchlog.database import get_db
from watchlog.services.reconciliation_service import ReconciliationService
from watchlog.services.replay_event_service import ReplayEventService

router = APIRouter(prefix="/api/replay-events", tags=["replay-events"])


@router.get("")
async def list_replay_events(
    limit: Optional[int] = Query(None, description="Max rows"),
    offset: Optional[int] = Query(None, description="Rows to skip"),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """All replay events with their title, latest watch date first."""
    service = ReplayEventService(db)
    return envelope(await service.list_all(limit=limit, offset=offset))


@router.get("/{event_id}")
async def get_replay_event(event_id: str, db: AsyncSession = Depends(get_db)) -> JSONResponse:
    service = ReplayEventService(db)
    return envelope(await service.get_event(event_id))


@router.post("")
async def create_replay_event(
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """
    Record a viewing.

    The owning title's replay count is refreshed in the same operation.
    """
    service = ReconciliationService(db)
    return envelope(await service.add_replay_event(payload), success_status=201)


@router.put("/{event_id}")
async def update_replay_event(
    event_id: str,
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    service = ReplayEventService(db)
    return envelope(await service.update_event(event_id, payload))


@router.delete("/{event_id}")
async def delete_replay_event(event_id: str, db: AsyncSession = Depends(get_db)) -> JSONResponse:
    service = ReplayEventService(db)
    return envelope(await service.delete_event(event_id))
