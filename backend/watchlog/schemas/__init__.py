"""
Pydantic Schemas

Export all schemas for easy importing.
"""
from watchlog.schemas.common import (
    MAX_PAGE_SIZE,
    PaginationParams,
    TitleStatus,
    TitleKind,
)
from watchlog.schemas.title import (
    TitleCreate,
    TitleUpdate,
    TitleResponse,
    TitleFilter,
)
from watchlog.schemas.replay_event import (
    ReplayEventCreate,
    ReplayEventUpdate,
    ReplayEventResponse,
    ReplayEventWithTitle,
    TitleSnapshot,
)
from watchlog.schemas.statistics import LibraryStatistics
from watchlog.schemas.reconciliation import ReconciledTitle

__all__ = [
    # Common
    "MAX_PAGE_SIZE",
    "PaginationParams",
    "TitleStatus",
    "TitleKind",
    # Title
    "TitleCreate",
    "TitleUpdate",
    "TitleResponse",
    "TitleFilter",
    # Replay event
    "ReplayEventCreate",
    "ReplayEventUpdate",
    "ReplayEventResponse",
    "ReplayEventWithTitle",
    "TitleSnapshot",
    # Statistics
    "LibraryStatistics",
    # Reconciliation
    "ReconciledTitle",
]
