"""
Pytest Configuration and Fixtures

Provides an in-memory test database, a deterministic clock and id factory,
and sample titles/replay events.
"""
import itertools
from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from watchlog.database import Database
from watchlog.services import (
    AggregateService,
    ReconciliationService,
    ReplayEventService,
    StatisticsService,
    TitleService,
)

# Use SQLite in-memory for testing
SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeClock:
    """Clock that advances one second on every reading."""

    def __init__(self, start: datetime = datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)):
        self.current = start
        self.readings = []

    def __call__(self) -> str:
        self.current += timedelta(seconds=1)
        value = self.current.strftime("%Y-%m-%dT%H:%M:%S.%fZ")
        self.readings.append(value)
        return value

    @property
    def last(self) -> str:
        return self.readings[-1]


class SequentialIds:
    """Readable ids: id-0001, id-0002, ..."""

    def __init__(self):
        self._counter = itertools.count(1)

    def __call__(self) -> str:
        return f"id-{next(self._counter):04d}"


@pytest.fixture
async def database():
    """Fresh in-memory database per test."""
    db = Database(SQLALCHEMY_DATABASE_URL)
    await db.create_all()
    yield db
    await db.drop_all()
    await db.dispose()


@pytest.fixture
async def db_session(database):
    async with database.session() as session:
        yield session


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ids():
    return SequentialIds()


@pytest.fixture
def title_service(db_session, clock, ids):
    return TitleService(db_session, clock=clock, id_factory=ids)


@pytest.fixture
def replay_event_service(db_session, clock, ids):
    return ReplayEventService(db_session, clock=clock, id_factory=ids)


@pytest.fixture
def aggregate_service(db_session, clock, ids):
    return AggregateService(db_session, clock=clock, id_factory=ids)


@pytest.fixture
def reconciliation_service(db_session, clock, ids):
    return ReconciliationService(db_session, clock=clock, id_factory=ids)


@pytest.fixture
def statistics_service(db_session, clock, ids):
    return StatisticsService(db_session, clock=clock, id_factory=ids)


@pytest.fixture
async def sample_movie(title_service):
    """Create a sample movie for testing."""
    result = await title_service.insert_title(
        {
            "title": "Heat",
            "original_title": "Heat",
            "kind": "movie",
            "status": "completed",
            "year": 1995,
            "runtime": 170,
            "genres": ["Crime", "Drama"],
            "personal_rating": 9.0,
            "external_id": 949,
        }
    )
    assert result.success, result.error
    return result.data


@pytest.fixture
async def sample_series(title_service):
    """Create a sample series for testing."""
    result = await title_service.insert_title(
        {
            "title": "The Wire",
            "kind": "series",
            "status": "watching",
            "current_season": 2,
            "current_episode": 4,
            "total_seasons": 5,
            "seasons": {1: {"episodes": [1, 2, 3]}, 2: {"episodes": [1, 2]}},
            "air_status": "Ended",
        }
    )
    assert result.success, result.error
    return result.data


@pytest.fixture
async def sample_replay_event(replay_event_service, sample_movie):
    """Create a sample replay event for testing."""
    result = await replay_event_service.add_event(
        {
            "title_id": sample_movie.id,
            "watch_date": "2024-06-01T20:00:00Z",
            "duration": 170,
            "progress": 1.0,
            "rating": 8.5,
            "notes": "Cinema rerun",
        }
    )
    assert result.success, result.error
    return result.data


@pytest.fixture
async def client(database):
    """HTTP client against an app bound to the test database."""
    from watchlog.main import create_app

    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client
