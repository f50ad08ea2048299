"""
Core building blocks shared by models and services.

Classes:
    ServiceResult: uniform result envelope
    WatchlogError: base of the error taxonomy
"""

from .exceptions import (
    WatchlogError,
    NotFoundError,
    ValidationFailure,
    StoreFailure,
    DecodeFailure,
)
from .result import ErrorType, ServiceResult
from .clock import Clock, IdFactory, utc_timestamp, new_id

__all__ = [
    # Exceptions
    "WatchlogError",
    "NotFoundError",
    "ValidationFailure",
    "StoreFailure",
    "DecodeFailure",
    # Result
    "ErrorType",
    "ServiceResult",
    # Clock
    "Clock",
    "IdFactory",
    "utc_timestamp",
    "new_id",
]
