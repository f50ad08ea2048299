"""
SQLAlchemy ORM Models

Export all models for easy importing.
"""
from watchlog.models.types import JSONEncodedText, TimestampMixin
from watchlog.models.title import Title
from watchlog.models.replay_event import ReplayEvent

__all__ = [
    "JSONEncodedText",
    "TimestampMixin",
    "Title",
    "ReplayEvent",
]
