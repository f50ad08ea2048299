"""
Service result envelope

Every public service operation returns a ServiceResult instead of raising.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorType(str, Enum):
    """Failure categories reported by services"""

    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    STORE = "store"
    PARTIAL = "partial"


@dataclass
class ServiceResult:
    """
    Uniform result of a service operation

    Attributes:
        success: whether the operation completed
        data: result payload (may carry a partial result on PARTIAL failures)
        error: human-readable failure message
        error_type: failure category (None on success)
        warnings: non-fatal notes collected during the operation
        completed_at: when the result was produced

    Example:
        result = ServiceResult.ok(title)
        if not result:
            print(result.error)
    """

    success: bool
    data: Any = None
    error: Optional[str] = None
    error_type: Optional[ErrorType] = None
    warnings: List[str] = field(default_factory=list)
    completed_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    @property
    def is_not_found(self) -> bool:
        return self.error_type == ErrorType.NOT_FOUND

    def to_dict(self) -> Dict[str, Any]:
        """Envelope form: {success, data} or {success, error}"""
        if self.success:
            payload: Dict[str, Any] = {"success": True, "data": self.data}
        else:
            payload = {
                "success": False,
                "error": self.error,
                "error_type": self.error_type.value if self.error_type else None,
            }
            if self.data is not None:
                payload["data"] = self.data
        if self.warnings:
            payload["warnings"] = list(self.warnings)
        return payload

    @classmethod
    def ok(cls, data: Any = None) -> "ServiceResult":
        """Build a successful result"""
        return cls(success=True, data=data)

    @classmethod
    def fail(
        cls,
        error: str,
        error_type: ErrorType = ErrorType.STORE,
        data: Any = None,
    ) -> "ServiceResult":
        """
        Build a failed result

        Args:
            error: message shown to the caller
            error_type: failure category
            data: optional partial result

        Returns:
            ServiceResult with success=False
        """
        return cls(success=False, data=data, error=error, error_type=error_type)

    def __repr__(self) -> str:
        status = "SUCCESS" if self.success else f"FAILED({self.error_type})"
        return f"ServiceResult({status})"

    def __bool__(self) -> bool:
        return self.success
