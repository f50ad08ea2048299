"""
Title Service Tests

Insert/update/delete, list ordering and the date_updated rule.
"""
import pytest
from sqlalchemy import text

from watchlog.core.result import ErrorType
from watchlog.services.title_service import resolve_date_updated


class TestResolveDateUpdated:
    """Tests for the date_updated precedence rule"""

    def _resolve(self, **overrides):
        values = {
            "previous_watched_date": "2024-01-01",
            "previous_season": 1,
            "previous_episode": 2,
            "previous_date_updated": "2024-01-05",
            "watched_date": "2024-01-01",
            "season": 1,
            "episode": 2,
            "now": "2025-03-01T12:00:00.000000Z",
        }
        values.update(overrides)
        return resolve_date_updated(**values)

    def test_new_watch_date_wins(self):
        """Should take the new watch date even when progress also changed."""
        assert self._resolve(watched_date="2024-02-10", episode=5) == "2024-02-10"

    def test_progress_change_uses_now(self):
        assert self._resolve(episode=3) == "2025-03-01T12:00:00.000000Z"
        assert self._resolve(season=2) == "2025-03-01T12:00:00.000000Z"

    def test_nothing_changed_keeps_previous(self):
        assert self._resolve() == "2024-01-05"

    def test_nothing_changed_without_previous_uses_now(self):
        assert self._resolve(previous_date_updated=None) == "2025-03-01T12:00:00.000000Z"

    def test_cleared_watch_date_keeps_previous(self):
        """A watch date changed to empty is a change, but not a usable date."""
        assert self._resolve(watched_date=None, episode=9) == "2024-01-05"

    def test_first_watch_date(self):
        assert self._resolve(previous_watched_date=None) == "2024-01-01"


@pytest.mark.asyncio
class TestInsertTitle:
    """Tests for TitleService.insert_title"""

    async def test_insert_generates_ids_and_timestamps(self, title_service, clock):
        """Should generate id and set date_added == date_updated == created_at."""
        result = await title_service.insert_title({"title": "X", "status": "watching"})

        assert result.success
        title = result.data
        assert title.id == "id-0001"
        assert title.date_added == title.date_updated == title.created_at == clock.last
        assert title.updated_at == clock.last
        assert title.replay_count == 0
        assert title.kind.value == "movie"
        assert title.current_season == 1
        assert title.current_episode == 0

    async def test_insert_defaults_to_watching(self, title_service):
        result = await title_service.insert_title({"title": "Alien"})

        assert result.data.status.value == "watching"

    async def test_insert_with_watched_date(self, title_service, clock):
        """date_added follows the supplied watched date."""
        result = await title_service.insert_title(
            {"title": "Alien", "watched_date": "2023-10-31"}
        )

        assert result.data.date_added == "2023-10-31"
        assert result.data.watched_date == "2023-10-31"
        assert result.data.date_updated == clock.last

    async def test_insert_ignores_caller_replay_count(self, title_service):
        result = await title_service.insert_title({"title": "Alien", "replay_count": 7})

        assert result.success
        assert result.data.replay_count == 0

    async def test_insert_missing_title_is_validation_failure(self, title_service):
        result = await title_service.insert_title({"status": "completed"})

        assert not result.success
        assert result.error_type == ErrorType.VALIDATION
        assert "title" in result.error

    async def test_insert_bad_status_is_validation_failure(self, title_service):
        result = await title_service.insert_title({"title": "Alien", "status": "binged"})

        assert result.error_type == ErrorType.VALIDATION

    async def test_insert_rating_out_of_range(self, title_service):
        result = await title_service.insert_title({"title": "Alien", "personal_rating": 11})

        assert result.error_type == ErrorType.VALIDATION

    async def test_column_default_matches_insert_default(self, db_session, title_service):
        """Rows written without a status read back as watching, like service inserts."""
        await db_session.execute(
            text(
                "INSERT INTO titles (id, title, replay_count, date_added, date_updated, "
                "created_at, updated_at) VALUES ('raw', 'Raw', 0, 'd', 'd', 'd', 'd')"
            )
        )
        await db_session.commit()

        raw = (await title_service.get_title("raw")).data
        inserted = (await title_service.insert_title({"title": "Alien"})).data

        assert raw.status == inserted.status
        assert raw.status.value == "watching"
        assert raw.kind.value == "movie"


@pytest.mark.asyncio
class TestUpdateTitle:
    """Tests for TitleService.update_title"""

    async def test_date_updated_scenario(self, title_service, clock):
        """Watch date sets date_updated; a later progress-only edit moves it to now."""
        inserted = (await title_service.insert_title({"title": "X", "status": "watching"})).data

        first = await title_service.update_title(
            inserted.id,
            {"watched_date": "2024-01-01", "current_season": 1, "current_episode": 2},
        )
        assert first.success
        assert first.data.date_updated == "2024-01-01"
        assert first.data.date_added == "2024-01-01"

        second = await title_service.update_title(
            inserted.id,
            {"watched_date": "2024-01-01", "current_season": 1, "current_episode": 3},
        )
        assert second.success
        assert second.data.date_updated == clock.last
        assert second.data.date_updated > first.data.date_updated
        assert second.data.current_episode == 3

    async def test_unchanged_progress_keeps_date_updated(self, title_service, sample_movie):
        result = await title_service.update_title(sample_movie.id, {"notes": "Still great"})

        assert result.data.notes == "Still great"
        assert result.data.date_updated == sample_movie.date_updated
        assert result.data.updated_at > sample_movie.updated_at

    async def test_partial_update_keeps_other_fields(self, title_service, sample_movie):
        result = await title_service.update_title(sample_movie.id, {"personal_rating": 7.5})

        title = result.data
        assert title.personal_rating == 7.5
        assert title.title == "Heat"
        assert title.runtime == 170
        assert title.genres == ["Crime", "Drama"]
        assert title.created_at == sample_movie.created_at

    async def test_update_cannot_set_replay_count(
        self, title_service, sample_movie, sample_replay_event
    ):
        result = await title_service.update_title(
            sample_movie.id, {"replay_count": 99, "notes": "x"}
        )

        assert result.success
        assert result.data.replay_count == 1

    async def test_clearing_watched_date(self, title_service, clock):
        inserted = (
            await title_service.insert_title({"title": "Alien", "watched_date": "2023-10-31"})
        ).data

        result = await title_service.update_title(inserted.id, {"watched_date": ""})

        assert result.data.watched_date is None
        assert result.data.date_added == clock.last

    async def test_update_missing_title(self, title_service, sample_movie):
        """Should fail with NOT_FOUND and leave the store untouched."""
        result = await title_service.update_title("missing", {"title": "Y"})

        assert not result.success
        assert result.error_type == ErrorType.NOT_FOUND
        assert "missing" in result.error

        titles = (await title_service.list_titles()).data
        assert [t.title for t in titles] == ["Heat"]

    async def test_update_invalid_payload(self, title_service, sample_movie):
        result = await title_service.update_title(sample_movie.id, {"current_episode": -1})

        assert result.error_type == ErrorType.VALIDATION

    async def test_null_required_field_is_ignored(self, title_service, sample_movie):
        result = await title_service.update_title(sample_movie.id, {"status": None})

        assert result.data.status.value == "completed"


@pytest.mark.asyncio
class TestListTitles:
    """Tests for TitleService.list_titles"""

    async def test_list_empty(self, title_service):
        result = await title_service.list_titles()

        assert result.success
        assert result.data == []

    async def test_ordered_by_date_updated_desc(self, title_service):
        old = (await title_service.insert_title({"title": "Old"})).data
        await title_service.insert_title({"title": "New"})
        await title_service.update_title(old.id, {"watched_date": "2020-05-05"})

        titles = (await title_service.list_titles()).data

        assert [t.title for t in titles] == ["New", "Old"]

    async def test_ties_fall_back_to_newest_insert(self, title_service):
        for name in ("A", "B", "C"):
            created = (await title_service.insert_title({"title": name})).data
            await title_service.update_title(created.id, {"watched_date": "2024-01-01"})

        titles = (await title_service.list_titles()).data

        assert [t.title for t in titles] == ["C", "B", "A"]

    async def test_filter_by_status(self, title_service, sample_movie, sample_series):
        completed = (await title_service.list_titles(status="completed")).data
        watching = (await title_service.list_titles(status="watching")).data

        assert [t.id for t in completed] == [sample_movie.id]
        assert [t.id for t in watching] == [sample_series.id]

    async def test_filter_by_kind(self, title_service, sample_movie, sample_series):
        series = (await title_service.list_titles(kind="series")).data

        assert [t.title for t in series] == ["The Wire"]

    async def test_unknown_status_filter(self, title_service):
        result = await title_service.list_titles(status="binged")

        assert result.error_type == ErrorType.VALIDATION

    async def test_pagination(self, title_service):
        for name in ("A", "B", "C", "D"):
            await title_service.insert_title({"title": name})

        page = (await title_service.list_titles(limit=2, offset=1)).data

        assert [t.title for t in page] == ["C", "B"]

    async def test_offset_past_end(self, title_service, sample_movie):
        result = await title_service.list_titles(limit=10, offset=5)

        assert result.data == []

    @pytest.mark.parametrize("limit", [0, 501])
    async def test_limit_bounds(self, title_service, limit):
        result = await title_service.list_titles(limit=limit)

        assert result.error_type == ErrorType.VALIDATION


@pytest.mark.asyncio
class TestLookupAndDelete:
    """Tests for get/exists/find_existing/delete"""

    async def test_get_missing_is_none(self, title_service):
        result = await title_service.get_title("missing")

        assert result.success
        assert result.data is None

    async def test_exists(self, title_service, sample_movie):
        assert (await title_service.exists(sample_movie.id)).data is True
        assert (await title_service.exists("missing")).data is False

    async def test_find_existing_by_name(self, title_service, sample_movie):
        assert (await title_service.find_existing("Heat")).data is True
        assert (await title_service.find_existing("Ronin")).data is False

    async def test_find_existing_by_external_id(self, title_service, sample_movie):
        assert (await title_service.find_existing("Heat (1995)", external_id=949)).data is True
        assert (await title_service.find_existing("Heat (1995)", external_id=1)).data is False

    async def test_delete(self, title_service, sample_movie):
        result = await title_service.delete_title(sample_movie.id)

        assert result.success
        assert result.data == sample_movie.id
        assert (await title_service.get_title(sample_movie.id)).data is None

    async def test_delete_missing(self, title_service):
        result = await title_service.delete_title("missing")

        assert result.error_type == ErrorType.NOT_FOUND
