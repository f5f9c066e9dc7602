"""Explicit success/failure return for recoverable operations."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from lspbank.models.exceptions import BankError

T = TypeVar("T")
E = TypeVar("E", bound=BankError)


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """Outcome of an operation that can fail without raising.

    Exactly one of ``error`` being None (success) or set (failure) holds;
    ``value`` may carry a payload in both cases, e.g. the rejected
    transaction record on a failed withdrawal.
    """

    value: T | None = None
    error: E | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> "Result[T, E]":
        return cls(value=value, error=None)

    @classmethod
    def failure(cls, error: E, value: T | None = None) -> "Result[T, E]":
        return cls(value=value, error=error)

    def unwrap(self) -> T | None:
        """
        Return the value of a successful result.

        Raises:
            BankError: The carried error, if the result is a failure
        """
        if self.error is not None:
            raise self.error
        return self.value
