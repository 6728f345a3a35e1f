"""
Result type for communicating success or failure without exceptions.

Repository methods never let persistence errors cross their boundary;
they return a Result instead and callers branch on ``is_success``.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Success/failure outcome of a repository operation.

    Attributes:
        success: True if the operation succeeded, False otherwise
        value: The successful result value (None on failure, and also a
            legitimate success value for lookups that found nothing)
        error: Error message (only present if success=False)

    Example:
        result = await repo.get_organization(org_id)
        if result.is_success:
            print(result.value.name if result.value else "not found")
        else:
            print(result.error)
    """

    success: bool
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "Result[T]":
        """Create a successful result wrapping ``value``."""
        return cls(success=True, value=value, error=None)

    @classmethod
    def fail(cls, error: str) -> "Result[T]":
        """Create a failure result carrying ``error``."""
        return cls(success=False, value=None, error=error)

    @property
    def is_success(self) -> bool:
        return self.success

    @property
    def is_failure(self) -> bool:
        return not self.success
