"""
Title Schemas

Pydantic models for Title operations.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional

from watchlog.schemas.common import TitleKind, TitleStatus, normalize_date


class TitleFields(BaseModel):
    """Descriptive and progress fields shared by create and update"""
    original_title: Optional[str] = Field(None, max_length=500)
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    external_id: Optional[int] = None
    external_rating: Optional[float] = Field(None, ge=0, le=10)
    personal_rating: Optional[float] = Field(None, ge=0, le=10)
    year: Optional[int] = Field(None, ge=0)
    runtime: Optional[int] = Field(None, ge=0, description="Runtime in minutes")
    genres: Optional[List[str]] = None
    total_episodes: Optional[int] = Field(None, ge=0)
    total_seasons: Optional[int] = Field(None, ge=0)
    seasons: Optional[Dict[int, Any]] = Field(None, description="Season number -> episodes/metadata")
    air_status: Optional[str] = Field(None, max_length=50)
    watch_source: Optional[str] = None
    notes: Optional[str] = None
    watched_date: Optional[str] = Field(None, description="First-watch date, ISO-8601")

    @field_validator("watched_date", mode="before")
    @classmethod
    def blank_watched_date_to_none(cls, value: Any) -> Any:
        return normalize_date(value)


class TitleCreate(TitleFields):
    """Input for inserting a title; id and timestamps are always generated"""
    title: str = Field(..., min_length=1, max_length=500)
    status: TitleStatus = TitleStatus.WATCHING
    kind: TitleKind = TitleKind.MOVIE
    current_episode: int = Field(0, ge=0)
    current_season: int = Field(1, ge=0)


class TitleUpdate(TitleFields):
    """
    Input for updating a title.

    Only fields the caller sets are written. An omitted watched_date counts
    as unchanged; an explicit null or blank one clears it.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    status: Optional[TitleStatus] = None
    kind: Optional[TitleKind] = None
    current_episode: Optional[int] = Field(None, ge=0)
    current_season: Optional[int] = Field(None, ge=0)


class TitleResponse(TitleFields):
    """Title as stored"""
    id: str
    title: str
    status: TitleStatus
    kind: TitleKind
    current_episode: Optional[int] = 0
    current_season: Optional[int] = 1
    replay_count: int = 0
    date_added: str
    date_updated: str
    created_at: str
    updated_at: str

    model_config = {"from_attributes": True}


class TitleFilter(BaseModel):
    """Title filter parameters"""
    status: Optional[TitleStatus] = Field(None, description="Filter by status")
    kind: Optional[TitleKind] = Field(None, description="Filter by kind")
