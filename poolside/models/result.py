"""Result type returned by every remote-store call."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    """Why a call did not succeed."""
    VALIDATION = "validation"  # rejected locally, no remote call issued
    IGNORED = "ignored"        # trigger dropped (no selection or already in flight)
    CONNECTION = "connection"  # transport failure
    RESPONSE = "response"      # non-success response from the API


@dataclass(frozen=True)
class ApiResult:
    """
    Outcome of a remote operation.

    Attributes:
        ok: Whether the operation succeeded
        value: Parsed payload on success
        error: Kind of failure when not ok
        message: Human readable failure message
    """
    ok: bool
    value: Any = None
    error: Optional[ErrorKind] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, value: Any = None) -> 'ApiResult':
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: ErrorKind, message: str) -> 'ApiResult':
        return cls(ok=False, error=error, message=message)

    @classmethod
    def ignored(cls, message: str) -> 'ApiResult':
        return cls(ok=False, error=ErrorKind.IGNORED, message=message)

    def to_dict(self) -> dict:
        """Convert to the ``{"success": ...}`` shape used by the web layer."""
        if self.ok:
            return {"success": True}
        return {
            "success": False,
            "error": self.message,
            "kind": self.error.value if self.error else None,
        }
