"""Tagged results returned by workflows to their callers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")

OK = "ok"
FAILED = "failed"
REJECTED = "rejected"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a validated value or a tagged failure with a notification.

    ``rejected`` means a caller-side precondition was not met and nothing was
    sent upstream; ``failed`` means an external capability call failed.
    """

    status: str
    value: Optional[T] = None
    reason: Optional[str] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == OK

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(status=OK, value=value)

    @classmethod
    def failure(cls, reason: str, message: str) -> "Outcome[T]":
        return cls(status=FAILED, reason=reason, message=message)

    @classmethod
    def rejected(cls, reason: str, message: str) -> "Outcome[T]":
        return cls(status=REJECTED, reason=reason, message=message)

    def notification(self) -> Optional[Dict[str, Any]]:
        if self.ok:
            return None
        return {"status": self.status, "reason": self.reason, "message": self.message}


__all__ = ["Outcome", "OK", "FAILED", "REJECTED"]
