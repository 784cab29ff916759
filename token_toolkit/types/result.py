"""
Result type for user-facing operations
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..errors import TokenToolkitError


class OpStatus(Enum):
    """Operation status"""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class OpResult:
    """
    Outcome of a toolkit operation

    Every outcome carries a short title and a detail line so a caller can
    report it without inspecting the error type.

    Attributes:
        status: Operation status
        title: Short user-facing title
        detail: Detail line
        value: Operation value on success
        error: The raised toolkit error on failure
        error_code: Error code for programmatic handling
        recoverable: Whether retrying might succeed
    """
    status: OpStatus
    title: str
    detail: str = ""
    value: Any = None
    error: Optional["TokenToolkitError"] = None
    error_code: Optional[str] = None
    recoverable: bool = False

    @property
    def is_success(self) -> bool:
        return self.status == OpStatus.SUCCESS

    @property
    def is_failed(self) -> bool:
        return self.status == OpStatus.FAILED

    def unwrap(self) -> Any:
        """Return the value, or re-raise the error"""
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def success(cls, title: str, value: Any = None, detail: str = "") -> "OpResult":
        """Create successful result"""
        return cls(status=OpStatus.SUCCESS, title=title, detail=detail, value=value)

    @classmethod
    def failed(cls, error: "TokenToolkitError", title: Optional[str] = None) -> "OpResult":
        """Create failed result from a toolkit error"""
        return cls(
            status=OpStatus.FAILED,
            title=title or error.title,
            detail=error.message,
            error=error,
            error_code=error.code.value,
            recoverable=error.recoverable,
        )

    def __str__(self) -> str:
        if self.detail:
            return f"{self.title}\n{self.detail}"
        return self.title
