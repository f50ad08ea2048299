"""
Replay Event Schemas

Pydantic models for Replay Event operations.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Any, Optional

from watchlog.schemas.common import TitleKind, normalize_date


class ReplayEventFields(BaseModel):
    """Base replay event schema"""
    episode: Optional[int] = Field(None, ge=0)
    season: Optional[int] = Field(None, ge=0)
    duration: Optional[int] = Field(None, ge=0, description="Minutes watched")
    progress: Optional[float] = Field(None, ge=0.0, le=1.0)
    rating: Optional[float] = Field(None, ge=0, le=10)
    notes: Optional[str] = None
    watch_source: Optional[str] = None


class ReplayEventCreate(ReplayEventFields):
    """Input for recording a viewing; watch_date defaults to now"""
    title_id: str = Field(..., min_length=1)
    watch_date: Optional[str] = None

    @field_validator("watch_date", mode="before")
    @classmethod
    def blank_watch_date_to_none(cls, value: Any) -> Any:
        return normalize_date(value)


class ReplayEventUpdate(ReplayEventFields):
    """Input for editing a viewing; only set fields are written"""
    watch_date: Optional[str] = Field(None, min_length=1)

    @field_validator("watch_date", mode="before")
    @classmethod
    def date_to_iso(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("watch_date cannot be cleared")
        return normalize_date(value) or ""


class ReplayEventResponse(ReplayEventFields):
    """Replay event as stored"""
    id: str
    title_id: str
    watch_date: str
    created_at: str
    updated_at: str

    model_config = {"from_attributes": True}


class TitleSnapshot(BaseModel):
    """Presentation fields of the owning title"""
    id: str
    title: str
    poster_path: Optional[str] = None
    kind: TitleKind


class ReplayEventWithTitle(ReplayEventResponse):
    """Replay event joined with its title; title is None when it was deleted"""
    title: Optional[TitleSnapshot] = None
