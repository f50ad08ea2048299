"""
Watchlog exceptions

All domain errors derive from WatchlogError. Services raise them internally;
the service_operation decorator turns them into ServiceResult failures.
"""

from typing import Any, Dict, List, Optional


class WatchlogError(Exception):
    """Base error for the watchlog package"""

    def __init__(self, message: str, entity: Optional[str] = None):
        self.message = message
        self.entity = entity
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.entity:
            return f"[{self.entity}] {self.message}"
        return self.message


class NotFoundError(WatchlogError):
    """
    The operation targets an id that does not exist.

    Attributes:
        entity_id: id that was looked up
    """

    def __init__(self, entity: str, entity_id: str):
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}", entity)


class ValidationFailure(WatchlogError):
    """
    Malformed or missing field at the service boundary.

    Attributes:
        errors: per-field error details (pydantic style)
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[Dict[str, Any]]] = None,
        entity: Optional[str] = None,
    ):
        self.errors = errors or []
        super().__init__(f"Validation failed: {message}", entity)


class StoreFailure(WatchlogError):
    """
    Statement execution failed in the underlying store.

    Attributes:
        original_error: the driver/ORM exception
    """

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        entity: Optional[str] = None,
    ):
        self.original_error = original_error
        super().__init__(message, entity)


class DecodeFailure(WatchlogError):
    """
    Stored JSON text could not be parsed.

    Never leaves the field codec: decoding degrades the value to None.
    """

    def __init__(self, message: str, raw: Optional[str] = None):
        self.raw = raw
        super().__init__(message, "codec")
