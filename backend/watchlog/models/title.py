"""
Title Model

One row per tracked movie or series.
"""
from sqlalchemy import Column, Float, Index, Integer, String, Text

from watchlog.database import Base
from watchlog.models.types import JSONEncodedText, TimestampMixin


class Title(Base, TimestampMixin):
    """
    Title (Movie or Series)

    replay_count is an aggregate of replay_events and is only written by
    the aggregate service.
    """
    __tablename__ = "titles"
    __table_args__ = (
        Index("idx_titles_status", "status"),
        Index("idx_titles_kind", "kind"),
        Index("idx_titles_external_id", "external_id"),
        Index("idx_titles_date_updated", "date_updated"),
    )

    id = Column(String(36), primary_key=True)
    title = Column(String(500), nullable=False)
    original_title = Column(String(500))
    overview = Column(Text)
    poster_path = Column(Text)
    backdrop_path = Column(Text)
    external_id = Column(Integer)
    external_rating = Column(Float)
    personal_rating = Column(Float)
    status = Column(String(20), nullable=False, server_default="watching")
    kind = Column(String(10), nullable=False, server_default="movie")
    year = Column(Integer)
    runtime = Column(Integer)  # minutes
    genres = Column("genres_json", JSONEncodedText)  # ["Drama", "Crime"]

    # Progress
    current_episode = Column(Integer, default=0)
    total_episodes = Column(Integer)
    current_season = Column(Integer, default=1)
    total_seasons = Column(Integer)
    seasons = Column("seasons_json", JSONEncodedText)  # {1: {"episodes": [...]}}
    air_status = Column(String(50))

    # User data
    watch_source = Column(Text)
    watched_date = Column(String(40))
    notes = Column(Text)

    # Derived
    replay_count = Column(Integer, nullable=False, default=0)
    date_added = Column(String(40), nullable=False)
    date_updated = Column(String(40), nullable=False)

    def __repr__(self):
        return f"<Title(kind={self.kind}, title={self.title})>"
