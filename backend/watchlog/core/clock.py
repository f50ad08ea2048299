"""
Clock and key generation

Timestamps are ISO-8601 UTC strings so that they sort lexically and can be
compared with caller-supplied watch dates such as "2024-01-01".
"""
import uuid
from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], str]
IdFactory = Callable[[], str]


def utc_timestamp() -> str:
    """Current UTC time, e.g. 2024-05-01T12:30:00.123456Z"""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def new_id() -> str:
    """Opaque unique identifier for a new record"""
    return str(uuid.uuid4())
