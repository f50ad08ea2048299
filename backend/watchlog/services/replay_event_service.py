"""
Replay Event Service

CRUD over replay events. Every write refreshes the owning title's
aggregates before the commit, so replay_count never goes stale.
"""
from typing import Any, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from watchlog.core.clock import Clock, IdFactory
from watchlog.core.exceptions import NotFoundError
from watchlog.models import ReplayEvent, Title
from watchlog.schemas.common import PaginationParams
from watchlog.schemas.replay_event import (
    ReplayEventCreate,
    ReplayEventResponse,
    ReplayEventUpdate,
    ReplayEventWithTitle,
    TitleSnapshot,
)
from watchlog.services.aggregate_service import AggregateService
from watchlog.services.base import BaseService, service_operation, validate_form


class ReplayEventService(BaseService):
    """Service class for Replay Event operations"""

    logger_name = "watchlog.replay_events"

    def __init__(
        self,
        db: AsyncSession,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
    ):
        super().__init__(db, clock, id_factory)
        self.aggregates = AggregateService(db, self.clock, self.id_factory)

    async def _load(self, event_id: str) -> ReplayEvent:
        event = await self.db.get(ReplayEvent, event_id)
        if event is None:
            raise NotFoundError("ReplayEvent", event_id)
        return event

    def _paginate(self, query, limit: Optional[int], offset: Optional[int]):
        pagination = validate_form(
            PaginationParams, {"limit": limit, "offset": offset or 0}, "pagination"
        )
        if pagination.limit:
            query = query.limit(pagination.limit)
        if pagination.offset:
            query = query.offset(pagination.offset)
        return query

    @service_operation("list replay events")
    async def list_by_title(
        self,
        title_id: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[ReplayEventResponse]:
        """Events of one title, latest watch date first"""
        query = (
            select(ReplayEvent)
            .where(ReplayEvent.title_id == title_id)
            .order_by(
                ReplayEvent.watch_date.desc(),
                ReplayEvent.created_at.desc(),
                ReplayEvent.id,
            )
        )
        query = self._paginate(query, limit, offset)

        events = (await self.db.execute(query)).scalars().all()
        return [ReplayEventResponse.model_validate(e) for e in events]

    @service_operation("list replay events")
    async def list_all(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[ReplayEventWithTitle]:
        """All events, latest watch date first, with a snapshot of their title"""
        query = (
            select(ReplayEvent, Title.title, Title.poster_path, Title.kind)
            .outerjoin(Title, ReplayEvent.title_id == Title.id)
            .order_by(
                ReplayEvent.watch_date.desc(),
                ReplayEvent.created_at.desc(),
                ReplayEvent.id,
            )
        )
        query = self._paginate(query, limit, offset)

        items = []
        for event, name, poster_path, kind in (await self.db.execute(query)).all():
            item = ReplayEventWithTitle.model_validate(event)
            if name is not None:
                item.title = TitleSnapshot(
                    id=event.title_id, title=name, poster_path=poster_path, kind=kind
                )
            items.append(item)
        return items

    @service_operation("get replay event")
    async def get_event(self, event_id: str) -> Optional[ReplayEventResponse]:
        """Single event by id, None when it does not exist"""
        event = await self.db.get(ReplayEvent, event_id)
        if event is None:
            return None
        return ReplayEventResponse.model_validate(event)

    @service_operation("count replay events")
    async def count_for_title(self, title_id: str) -> int:
        return await self.aggregates.count_events(title_id)

    @service_operation("find latest replay event")
    async def latest_added(self, title_id: str) -> Optional[ReplayEventResponse]:
        """Most recently recorded event of a title (by created_at), if any"""
        event = await self.db.scalar(
            select(ReplayEvent)
            .where(ReplayEvent.title_id == title_id)
            .order_by(ReplayEvent.created_at.desc(), ReplayEvent.id.desc())
            .limit(1)
        )
        if event is None:
            return None
        return ReplayEventResponse.model_validate(event)

    async def _add(self, form: ReplayEventCreate) -> ReplayEventResponse:
        if await self.db.get(Title, form.title_id) is None:
            raise NotFoundError("Title", form.title_id)

        timestamp = self.clock()
        event = ReplayEvent(
            id=self.id_factory(),
            title_id=form.title_id,
            watch_date=form.watch_date or timestamp,
            episode=form.episode,
            season=form.season,
            duration=form.duration,
            progress=form.progress,
            rating=form.rating,
            notes=form.notes,
            watch_source=form.watch_source,
            created_at=timestamp,
            updated_at=timestamp,
        )
        self.db.add(event)
        await self.aggregates.refresh(event.title_id)
        await self.db.commit()

        self.logger.info(f"Recorded replay event {event.id} for title {event.title_id}")
        return ReplayEventResponse.model_validate(event)

    @service_operation("add replay event")
    async def add_event(self, data: Any) -> ReplayEventResponse:
        """Record a viewing and refresh the title's replay_count"""
        form = validate_form(ReplayEventCreate, data, "replay_event")
        return await self._add(form)

    @service_operation("add replay event")
    async def add_quick(self, title_id: str, notes: Optional[str] = None) -> ReplayEventResponse:
        """Record a complete viewing happening now"""
        form = validate_form(
            ReplayEventCreate,
            {"title_id": title_id, "duration": 0, "progress": 1.0, "notes": notes},
            "replay_event",
        )
        return await self._add(form)

    @service_operation("update replay event")
    async def update_event(self, event_id: str, data: Any) -> ReplayEventResponse:
        """Update the fields the caller set; title_id cannot change"""
        form = validate_form(ReplayEventUpdate, data, "replay_event")
        event = await self._load(event_id)

        for key, value in form.model_dump(exclude_unset=True).items():
            setattr(event, key, value)
        event.updated_at = self.clock()
        await self.aggregates.refresh(event.title_id)
        await self.db.commit()

        self.logger.info(f"Updated replay event {event_id}")
        return ReplayEventResponse.model_validate(event)

    @service_operation("delete replay event")
    async def delete_event(self, event_id: str) -> str:
        """Delete an event, then recount its title's events"""
        event = await self._load(event_id)
        title_id = event.title_id

        await self.db.delete(event)
        await self.aggregates.refresh(title_id)
        await self.db.commit()

        self.logger.info(f"Deleted replay event {event_id} of title {title_id}")
        return event_id

    @service_operation("delete replay events")
    async def delete_for_title(self, title_id: str) -> int:
        """Remove every event of a title; returns how many were removed"""
        result = await self.db.execute(
            delete(ReplayEvent).where(ReplayEvent.title_id == title_id)
        )
        await self.aggregates.refresh(title_id)
        await self.db.commit()

        removed = result.rowcount or 0
        self.logger.info(f"Purged {removed} replay events of title {title_id}")
        return removed
