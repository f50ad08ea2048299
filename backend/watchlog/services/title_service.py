"""
Title Service

CRUD, ordering and pagination over titles, plus the rule that derives
date_updated when a title is edited.
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlalchemy import or_, select

from watchlog.core.exceptions import NotFoundError
from watchlog.models import Title
from watchlog.schemas.common import PaginationParams
from watchlog.schemas.title import TitleCreate, TitleFilter, TitleResponse, TitleUpdate
from watchlog.services.base import BaseService, service_operation, validate_form

# Fields an update may not set to null
_REQUIRED_ON_UPDATE = {"title", "status", "kind", "current_episode", "current_season"}


def resolve_date_updated(
    previous_watched_date: Optional[str],
    previous_season: Optional[int],
    previous_episode: Optional[int],
    previous_date_updated: Optional[str],
    watched_date: Optional[str],
    season: Optional[int],
    episode: Optional[int],
    now: str,
) -> str:
    """
    Pick date_updated for an edited title.

    In priority order:
    1. watch date changed to a non-empty value -> that watch date
    2. watch date unchanged, season or episode changed -> now
    3. otherwise -> previous date_updated (now if it was never set)
    """
    watched_date_changed = watched_date != previous_watched_date
    progress_changed = season != previous_season or episode != previous_episode

    if watched_date_changed and watched_date:
        return watched_date
    if not watched_date_changed and progress_changed:
        return now
    return previous_date_updated or now


def _column_values(form: Any, exclude_unset: bool = False) -> Dict[str, Any]:
    values = form.model_dump(exclude_unset=exclude_unset)
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in values.items()
    }


class TitleService(BaseService):
    """Service class for Title operations"""

    logger_name = "watchlog.titles"

    async def _load(self, title_id: str) -> Title:
        title = await self.db.get(Title, title_id)
        if title is None:
            raise NotFoundError("Title", title_id)
        return title

    @service_operation("list titles")
    async def list_titles(
        self,
        status: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        kind: Optional[str] = None,
    ) -> List[TitleResponse]:
        """Titles ordered by date_updated, most recently touched first"""
        filters = validate_form(TitleFilter, {"status": status, "kind": kind}, "filter")
        pagination = validate_form(
            PaginationParams, {"limit": limit, "offset": offset or 0}, "pagination"
        )

        query = select(Title)
        if filters.status:
            query = query.where(Title.status == filters.status.value)
        if filters.kind:
            query = query.where(Title.kind == filters.kind.value)

        # Equal date_updated values fall back to insertion order, newest first
        query = query.order_by(
            Title.date_updated.desc(), Title.created_at.desc(), Title.id
        )
        if pagination.limit:
            query = query.limit(pagination.limit)
        if pagination.offset:
            query = query.offset(pagination.offset)

        titles = (await self.db.execute(query)).scalars().all()
        return [TitleResponse.model_validate(t) for t in titles]

    @service_operation("get title")
    async def get_title(self, title_id: str) -> Optional[TitleResponse]:
        """Single title by id, None when it does not exist"""
        title = await self.db.get(Title, title_id)
        if title is None:
            return None
        return TitleResponse.model_validate(title)

    @service_operation("check title")
    async def exists(self, title_id: str) -> bool:
        return await self.db.get(Title, title_id) is not None

    @service_operation("look up existing title")
    async def find_existing(self, title: str, external_id: Optional[int] = None) -> bool:
        """True when a title with the same name or external id is stored"""
        condition = Title.title == title
        if external_id is not None:
            condition = or_(condition, Title.external_id == external_id)
        found = await self.db.scalar(select(Title.id).where(condition).limit(1))
        return found is not None

    @service_operation("add title")
    async def insert_title(self, data: Any) -> TitleResponse:
        """
        Insert a title.

        id, created_at, updated_at and date_updated are always generated;
        date_added is the supplied watched_date, or now.
        """
        form = validate_form(TitleCreate, data, "title")
        timestamp = self.clock()

        title = Title(
            id=self.id_factory(),
            **_column_values(form),
            replay_count=0,
            date_added=form.watched_date or timestamp,
            date_updated=timestamp,
            created_at=timestamp,
            updated_at=timestamp,
        )
        self.db.add(title)
        await self.db.commit()

        self.logger.info(f"Added title {title.id} ({title.title})")
        return TitleResponse.model_validate(title)

    @service_operation("update title")
    async def update_title(self, title_id: str, data: Any) -> TitleResponse:
        """
        Update the fields the caller set and re-derive date_added/date_updated.

        replay_count and created_at are never taken from the caller.
        """
        form = validate_form(TitleUpdate, data, "title")
        title = await self._load(title_id)
        timestamp = self.clock()

        changes = {
            key: value
            for key, value in _column_values(form, exclude_unset=True).items()
            if value is not None or key not in _REQUIRED_ON_UPDATE
        }
        watched_date = changes.get("watched_date", title.watched_date)
        season = changes.get("current_season", title.current_season)
        episode = changes.get("current_episode", title.current_episode)

        date_updated = resolve_date_updated(
            previous_watched_date=title.watched_date,
            previous_season=title.current_season,
            previous_episode=title.current_episode,
            previous_date_updated=title.date_updated,
            watched_date=watched_date,
            season=season,
            episode=episode,
            now=timestamp,
        )

        for key, value in changes.items():
            setattr(title, key, value)
        title.date_added = watched_date or timestamp
        title.date_updated = date_updated
        title.updated_at = timestamp
        await self.db.commit()

        self.logger.info(f"Updated title {title_id} (date_updated={date_updated})")
        return TitleResponse.model_validate(title)

    @service_operation("delete title")
    async def delete_title(self, title_id: str) -> str:
        """Delete a title row; its replay events are left untouched"""
        title = await self._load(title_id)
        await self.db.delete(title)
        await self.db.commit()

        self.logger.info(f"Deleted title {title_id}")
        return title_id
