"""
Statistics Schemas
"""
from pydantic import BaseModel, Field
from typing import Dict


class LibraryStatistics(BaseModel):
    """Library-wide counters"""
    total_titles: int = 0
    by_status: Dict[str, int] = Field(default_factory=dict)
    by_kind: Dict[str, int] = Field(default_factory=dict)
    total_replay_events: int = 0
    total_watch_minutes: int = Field(0, description="Completed titles only")
    average_rating: float = 0.0
