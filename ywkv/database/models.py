"""
Outcome models for key-value operations.

Status is the closed vocabulary every read or write is classified into; each
member maps to exactly one HTTP status code. Result pairs a status with its
value: the stored value (Found), the overwritten value (SuccessOverwrite), a
diagnostic message (Failure), or empty bytes otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Status(str, Enum):
    """Outcome classification of one operation; rendered by name."""

    FOUND = "Found"
    MISSING = "Missing"
    SUCCESS_NEW = "SuccessNew"
    SUCCESS_OVERWRITE = "SuccessOverwrite"
    FAILURE = "Failure"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]


_HTTP_STATUS = {
    Status.FOUND: 200,
    Status.MISSING: 404,
    Status.SUCCESS_NEW: 200,
    Status.SUCCESS_OVERWRITE: 200,
    Status.FAILURE: 500,
}


@dataclass(frozen=True)
class Result:
    """Outcome of a single read or write. Build through the named constructors."""

    value: bytes
    status: Status

    @classmethod
    def found(cls, value: bytes) -> Result:
        return cls(value=value, status=Status.FOUND)

    @classmethod
    def missing(cls) -> Result:
        return cls(value=b"", status=Status.MISSING)

    @classmethod
    def success_new(cls) -> Result:
        return cls(value=b"", status=Status.SUCCESS_NEW)

    @classmethod
    def success_overwrite(cls, previous: bytes) -> Result:
        return cls(value=previous, status=Status.SUCCESS_OVERWRITE)

    @classmethod
    def failure(cls, message: str) -> Result:
        """Failure carries a human-readable diagnostic in the value slot."""
        return cls(value=message.encode("utf-8"), status=Status.FAILURE)

    @property
    def http_status(self) -> int:
        return self.status.http_status

    @property
    def text(self) -> str:
        """Value as text for JSON; bytes that are not valid UTF-8 are replaced with U+FFFD."""
        return self.value.decode("utf-8", errors="replace")
