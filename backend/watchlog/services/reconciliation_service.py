"""
Reconciliation Service

Cross-entity workflows over titles and replay events. Each step is its own
unit of work; a title update that succeeded stays committed even if the
follow-up event sync fails, and the result says so.
"""
import logging
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from watchlog.core.clock import Clock, IdFactory
from watchlog.core.exceptions import ValidationFailure
from watchlog.core.result import ErrorType, ServiceResult
from watchlog.schemas.reconciliation import ReconciledTitle
from watchlog.schemas.title import TitleUpdate
from watchlog.services.base import validate_form
from watchlog.services.replay_event_service import ReplayEventService
from watchlog.services.title_service import TitleService


class ReconciliationService:
    """
    Entry point for callers that touch both titles and replay events.

    Example:
        service = ReconciliationService(session)
        result = await service.update_title_and_sync_latest_event(
            title_id, {"personal_rating": 9, "status": "completed"}
        )
    """

    def __init__(
        self,
        db: AsyncSession,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
    ):
        self.titles = TitleService(db, clock, id_factory)
        self.replay_events = ReplayEventService(db, clock, id_factory)
        self.logger = logging.getLogger("watchlog.reconciliation")

    async def add_replay_event(self, data: Any) -> ServiceResult:
        """Record a viewing; the title's replay_count is refreshed with it"""
        return await self.replay_events.add_event(data)

    async def add_quick_replay(self, title_id: str, notes: Optional[str] = None) -> ServiceResult:
        return await self.replay_events.add_quick(title_id, notes)

    async def update_title_and_sync_latest_event(
        self, title_id: str, data: Any
    ) -> ServiceResult:
        """
        Update a title, then copy its rating/notes/source onto the most
        recently added replay event.

        The sync only runs when the update carries a personal rating, and
        only touches an existing event: no replay event is ever created
        here. If the title update fails, its failure is returned unchanged.
        """
        try:
            form = validate_form(TitleUpdate, data, "title")
        except ValidationFailure as e:
            return ServiceResult.fail(e.message, ErrorType.VALIDATION)

        updated = await self.titles.update_title(title_id, form)
        if not updated:
            return updated

        if form.personal_rating is None:
            return ServiceResult.ok(ReconciledTitle(title=updated.data))

        latest = await self.replay_events.latest_added(title_id)
        if not latest:
            return self._partial(updated.data, latest.error)
        if latest.data is None:
            return ServiceResult.ok(ReconciledTitle(title=updated.data))

        # The event mirrors the title as stored after the update
        sync = {
            "rating": updated.data.personal_rating,
            "notes": updated.data.notes,
            "watch_source": updated.data.watch_source,
        }

        synced = await self.replay_events.update_event(latest.data.id, sync)
        if not synced:
            return self._partial(updated.data, synced.error)

        # The event write refreshed the title's aggregates; return the fresh row
        refreshed = await self.titles.get_title(title_id)
        title = refreshed.data if refreshed and refreshed.data else updated.data

        self.logger.info(f"Synced rating of title {title_id} to replay event {latest.data.id}")
        return ServiceResult.ok(ReconciledTitle(title=title, synced_event=synced.data))

    async def delete_title(
        self, title_id: str, purge_replay_events: bool = False
    ) -> ServiceResult:
        """
        Delete a title. Its replay events stay in place unless
        purge_replay_events is set.
        """
        deleted = await self.titles.delete_title(title_id)
        if not deleted or not purge_replay_events:
            return deleted

        purged = await self.replay_events.delete_for_title(title_id)
        if not purged:
            return ServiceResult.fail(
                f"Title deleted but purging its replay events failed: {purged.error}",
                ErrorType.PARTIAL,
                data=title_id,
            )
        result = ServiceResult.ok(title_id)
        result.add_warning(f"Removed {purged.data} replay events")
        return result

    def _partial(self, title, error: Optional[str]) -> ServiceResult:
        self.logger.error(f"Title {title.id} updated but replay event sync failed: {error}")
        return ServiceResult.fail(
            f"Title updated but syncing the latest replay event failed: {error}",
            ErrorType.PARTIAL,
            data=ReconciledTitle(title=title),
        )
