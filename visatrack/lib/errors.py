"""
Tracker Exceptions Module.

Only caller contract violations raise. Lookup misses and storage failures
are recovered locally (no-op / seed fallback / logged write failure).
"""

from typing import Any, Dict, Iterable, Optional


class TrackerError(Exception):
    """Base exception for all tracker errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        parts = [self.message]
        if self.error_code:
            parts.insert(0, f"[{self.error_code}]")
        return " ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class InvalidStatusError(TrackerError, ValueError):
    """Raised when a status value is not one of the allowed enum values."""

    def __init__(self, value: Any, allowed: Iterable[str]):
        allowed = list(allowed)
        super().__init__(
            f"Invalid status {value!r}; expected one of: {', '.join(allowed)}",
            error_code="INVALID_STATUS",
            details={"value": value, "allowed": allowed},
        )
        self.value = value
        self.allowed = allowed


class InvalidPatchError(TrackerError, ValueError):
    """Raised when a document edit names fields that cannot be edited."""

    def __init__(self, message: str, fields: Optional[Iterable[str]] = None):
        fields = sorted(fields or [])
        super().__init__(
            message,
            error_code="INVALID_PATCH",
            details={"fields": fields},
        )
        self.fields = fields


class InvalidStorageKeyError(TrackerError, ValueError):
    """Raised when a storage key cannot be mapped to a storage slot."""

    def __init__(self, key: Any):
        super().__init__(
            f"Invalid storage key: {key!r}",
            error_code="INVALID_STORAGE_KEY",
            details={"key": key},
        )
        self.key = key


class DependentNotFoundError(TrackerError, LookupError):
    """Raised when a dependent id is not registered."""

    def __init__(self, dependent_id: str):
        super().__init__(
            f"Dependent not found: {dependent_id}",
            error_code="DEPENDENT_NOT_FOUND",
            details={"dependent_id": dependent_id},
        )
        self.dependent_id = dependent_id
