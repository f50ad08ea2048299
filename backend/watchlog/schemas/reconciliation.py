"""
Reconciliation Schemas
"""
from pydantic import BaseModel
from typing import Optional

from watchlog.schemas.replay_event import ReplayEventResponse
from watchlog.schemas.title import TitleResponse


class ReconciledTitle(BaseModel):
    """Outcome of a title update plus the optional latest-event sync"""
    title: TitleResponse
    synced_event: Optional[ReplayEventResponse] = None
