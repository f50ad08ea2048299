"""
Common Schemas

Shared schemas for pagination and enums.
"""
from pydantic import BaseModel, Field
from typing import Any, Optional
from datetime import date, datetime
from enum import Enum

MAX_PAGE_SIZE = 500


class PaginationParams(BaseModel):
    """Limit/offset window for list operations; no limit means everything"""
    limit: Optional[int] = Field(None, ge=1, le=MAX_PAGE_SIZE, description="Max rows")
    offset: int = Field(0, ge=0, description="Rows to skip")


# Enum definitions matching database values

class TitleStatus(str, Enum):
    """Lifecycle status of a title"""
    WATCHING = "watching"
    COMPLETED = "completed"
    PLANNED = "planned"
    PAUSED = "paused"
    DROPPED = "dropped"


class TitleKind(str, Enum):
    """Kind of title"""
    MOVIE = "movie"
    SERIES = "series"


def normalize_date(value: Any) -> Any:
    """date/datetime -> ISO string, blank string -> None"""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, str) and not value.strip():
        return None
    return value
