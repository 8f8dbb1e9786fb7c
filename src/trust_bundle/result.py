"""
Result type — railway-style error handling for best-effort collection.

A Result[T] is either Success(value: T) or Failure(error: FailureDescription).
Every fallible step of certificate collection (trust store reads, stat calls,
directory walks) is wrapped into a Result so a single bad source can never
abort the whole aggregation:

    read_trust_store ──Success──→ entries
          │ Failure
          └──get_or_else──→ []   (degraded, not fatal)

Only the operations the package needs are kept: construction, exception
capture, failure peeks and a default for the failure track.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@unique
class ErrorCode(Enum):
    """Failure categories for certificate collection."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    """Malformed setting, e.g. a certificate path that is not absolute."""

    FILESYSTEM_ERROR = "FILESYSTEM_ERROR"
    """stat/enumeration failures (missing path, permission denied)."""

    TRUST_STORE_ERROR = "TRUST_STORE_ERROR"
    """The platform trust-store reader raised."""

    CERTIFICATE_LOAD_ERROR = "CERTIFICATE_LOAD_ERROR"
    """An entry could not be loaded into an SSL context."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    """Unexpected/unclassified failures."""


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor carrying error code, message, optional exception, and timestamp.

    >>> desc = FailureDescription(ErrorCode.FILESYSTEM_ERROR, "Permission denied")
    >>> desc.code
    <ErrorCode.FILESYSTEM_ERROR: 'FILESYSTEM_ERROR'>
    """

    code: ErrorCode
    message: str
    exception: Optional[BaseException] = field(default=None, repr=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


class Result(Generic[T]):
    """
    Two possible states:
      - Success(value: T)
      - Failure(error: FailureDescription)

    Callers unwrap with get_or_else, falling back to a degraded default.

        >>> Result.success([b"cert"]).get_or_else([])
        [b'cert']
        >>> Result.failure(ErrorCode.TRUST_STORE_ERROR, "boom").get_or_else([])
        []
    """

    # ──────────────────────── Introspection ────────────────────────

    def is_success(self) -> bool:
        return isinstance(self, Success)

    def is_failure(self) -> bool:
        return isinstance(self, Failure)

    def value(self) -> T:
        """Extract the success value. Raises ValueError if called on a Failure."""
        match self:
            case Success(v):
                return v
            case Failure(err):
                raise ValueError(f"Cannot get value from a Failure: {err.message}")
        raise TypeError("unreachable")  # pragma: no cover

    def error(self) -> FailureDescription:
        """Extract the failure description. Raises ValueError if called on a Success."""
        match self:
            case Failure(err):
                return err
            case Success(v):
                raise ValueError(f"Cannot get error from a Success: {v}")
        raise TypeError("unreachable")  # pragma: no cover

    # ──────────────────────── Side effects ────────────────────────

    def peek_failure(self, action: Callable[[FailureDescription], Any]) -> Result[T]:
        """Run a side effect on failure without altering the Result."""
        match self:
            case Failure(err):
                action(err)
        return self

    # ──────────────────────── Recovery ────────────────────────

    def get_or_else(self, default: T) -> T:
        match self:
            case Success(v):
                return v
            case _:
                return default

    # ──────────────────────── Static Factories ────────────────────────

    @staticmethod
    def success(value: T) -> Result[T]:
        return Success(value)

    @staticmethod
    def failure(
        code: ErrorCode,
        message: str,
        exception: Optional[BaseException] = None,
    ) -> Result[T]:
        return Failure(FailureDescription(code=code, message=message, exception=exception))

    @staticmethod
    def from_computation(
        computation: Callable[[], T],
        error_code: ErrorCode,
        error_message: str,
    ) -> Result[T]:
        """
        Run a computation that may raise and capture the outcome.

            Result.from_computation(
                lambda: os.stat(path),
                ErrorCode.FILESYSTEM_ERROR,
                f"Cannot stat {path}",
            )
        """
        try:
            return Result.success(computation())
        except Exception as e:
            return Result.failure(error_code, error_message, e)

    # ──────────────────────── Dunder methods ────────────────────────

    def __bool__(self) -> bool:
        return self.is_success()


@dataclass(frozen=True, slots=True)
class Success(Result[T]):
    """The success track: wraps a value of type T."""

    _value: T

    def __init__(self, value: T) -> None:
        if value is None:
            raise TypeError("Success value must not be None")
        object.__setattr__(self, "_value", value)

    def __repr__(self) -> str:
        return f"Success({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Success):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Success", repr(self._value)))


Success.__match_args__ = ("_value",)


@dataclass(frozen=True, slots=True)
class Failure(Result[T]):
    """The failure track: wraps a FailureDescription."""

    _error: FailureDescription

    def __init__(self, error: FailureDescription) -> None:
        if error is None:
            raise TypeError("Failure error must not be None")
        object.__setattr__(self, "_error", error)

    def __repr__(self) -> str:
        return f"Failure({self._error.code.value}: {self._error.message!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Failure):
            return (
                self._error.code == other._error.code
                and self._error.message == other._error.message
            )
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Failure", self._error.code, self._error.message))


Failure.__match_args__ = ("_error",)
