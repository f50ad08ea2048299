"""
Replay Event Model

One recorded viewing of a title.
"""
from sqlalchemy import Column, Float, Index, Integer, String, Text

from watchlog.database import Base
from watchlog.models.types import TimestampMixin


class ReplayEvent(Base, TimestampMixin):
    """
    Replay Event (single watch occurrence)

    title_id carries no FK constraint: deleting a title leaves its events
    in place unless they are purged explicitly.
    """
    __tablename__ = "replay_events"
    __table_args__ = (
        Index("idx_replay_events_title_id", "title_id"),
        Index("idx_replay_events_watch_date", "watch_date"),
    )

    id = Column(String(36), primary_key=True)
    title_id = Column(String(36), nullable=False)
    watch_date = Column(String(40), nullable=False)
    episode = Column(Integer)
    season = Column(Integer)
    duration = Column(Integer)  # minutes
    progress = Column(Float)  # 0.0 - 1.0
    rating = Column(Float)
    notes = Column(Text)
    watch_source = Column(Text)

    def __repr__(self):
        return f"<ReplayEvent(title_id={self.title_id}, watch_date={self.watch_date})>"
