"""
Operation Result

Flows return a Result instead of raising across their network steps.
A Result carries either a value or exactly one AuthError.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from .errors import AuthError, ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a transport call or a flow operation."""
    value: T | None = None
    error: AuthError | None = None

    @classmethod
    def success(cls, value: T | None = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: AuthError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> ErrorKind | None:
        """Error kind, or None on success."""
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> T | None:
        """
        Return the value, raising the carried error on failure.

        Lets callers that prefer exceptions use `try/except AuthError`.
        """
        if self.error is not None:
            raise self.error
        return self.value
