"""
Custom SQLAlchemy Types and Mixins

Provides the JSON text column type for nested title fields
and the common technical timestamp columns.
"""
from sqlalchemy import Column, String, Text, TypeDecorator

from watchlog.core import field_codec


class JSONEncodedText(TypeDecorator):
    """
    Structured value stored as JSON text.

    Writes go through field_codec.encode; reads through field_codec.decode,
    so a malformed stored value loads as None instead of failing the query.
    """
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return field_codec.encode(value)

    def process_result_value(self, value, dialect):
        return field_codec.decode(value)


class TimestampMixin:
    """
    Mixin for technical timestamp columns.

    Values are ISO-8601 strings produced by the service clock:
    - created_at: set once on insert
    - updated_at: refreshed on every write
    """
    created_at = Column(String(40), nullable=False)
    updated_at = Column(String(40), nullable=False)
