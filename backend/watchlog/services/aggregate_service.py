"""
Aggregate Service

Recomputes the replay-derived fields of a title from its replay events.
"""
from typing import Optional

from sqlalchemy import func, select

from watchlog.models import ReplayEvent, Title
from watchlog.services.base import BaseService, service_operation


class AggregateService(BaseService):
    """Service class for title aggregates"""

    logger_name = "watchlog.aggregates"

    async def count_events(self, title_id: str) -> int:
        count = await self.db.scalar(
            select(func.count(ReplayEvent.id)).where(ReplayEvent.title_id == title_id)
        )
        return count or 0

    async def refresh(self, title_id: str) -> Optional[int]:
        """
        Set replay_count to the current event count and stamp updated_at.

        Runs inside the caller's unit of work (flushes, does not commit).
        Returns the new count, or None when the title no longer exists.
        """
        title = await self.db.get(Title, title_id)
        if title is None:
            self.logger.info(f"Skipping aggregate refresh, title {title_id} is gone")
            return None

        await self.db.flush()
        count = await self.count_events(title_id)
        title.replay_count = count
        title.updated_at = self.clock()
        await self.db.flush()

        self.logger.debug(f"Title {title_id} replay_count={count}")
        return count

    @service_operation("recalculate replay count")
    async def recalculate(self, title_id: str) -> Optional[int]:
        """Standalone recalculation for one title"""
        count = await self.refresh(title_id)
        await self.db.commit()
        return count
