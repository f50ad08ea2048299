"""
Statistics Service

Library-wide counters for the overview screen.
"""
from sqlalchemy import func, select

from watchlog.models import ReplayEvent, Title
from watchlog.schemas.common import TitleKind, TitleStatus
from watchlog.schemas.statistics import LibraryStatistics
from watchlog.services.base import BaseService, service_operation

# Assumed runtime (minutes) for completed titles without one
DEFAULT_RUNTIME = 120


class StatisticsService(BaseService):
    """Service class for library statistics"""

    logger_name = "watchlog.statistics"

    @service_operation("compute statistics")
    async def summary(self) -> LibraryStatistics:
        by_status = {status.value: 0 for status in TitleStatus}
        rows = await self.db.execute(
            select(Title.status, func.count(Title.id)).group_by(Title.status)
        )
        for status, count in rows.all():
            by_status[status] = count

        by_kind = {kind.value: 0 for kind in TitleKind}
        rows = await self.db.execute(
            select(Title.kind, func.count(Title.id)).group_by(Title.kind)
        )
        for kind, count in rows.all():
            by_kind[kind] = count

        total_events = await self.db.scalar(select(func.count(ReplayEvent.id))) or 0

        rows = await self.db.execute(
            select(Title.runtime, Title.replay_count).where(
                Title.status == TitleStatus.COMPLETED.value
            )
        )
        watch_minutes = sum(
            (runtime or DEFAULT_RUNTIME) * max(replay_count or 0, 1)
            for runtime, replay_count in rows.all()
        )

        # A zero rating means "not rated"
        average = await self.db.scalar(
            select(func.avg(Title.personal_rating)).where(Title.personal_rating > 0)
        )

        return LibraryStatistics(
            total_titles=sum(by_status.values()),
            by_status=by_status,
            by_kind=by_kind,
            total_replay_events=total_events,
            total_watch_minutes=watch_minutes,
            average_rating=round(float(average or 0.0), 2),
        )
