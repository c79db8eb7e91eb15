"""Two-variant operation result used by every fallible chronomaster call.

A result is either ``Success(value)`` or ``Failure(error)``.  Callers
dispatch with ``isinstance``::

    result = parser.parse("31/10/2025", utc)
    if isinstance(result, Success):
        print(result.value.year)
    else:
        print(result.message)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from chronomaster.errors import ChronoError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """A successful result carrying ``value``."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Return the carried value."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """A failed result carrying a ``ChronoError``."""

    error: ChronoError

    @property
    def is_success(self) -> bool:
        return False

    @property
    def message(self) -> str:
        """The user-displayable error message."""
        return self.error.message

    @property
    def cause(self) -> BaseException | None:
        """The lower-level exception behind the error, if any."""
        return self.error.cause

    def unwrap(self) -> "T":
        """Raise the carried error.

        Raises
        ------
        ChronoError
            Always.
        """
        raise self.error

    def unwrap_or(self, default: T) -> T:
        return default


Result = Union[Success[T], Failure]

__all__ = ["Success", "Failure", "Result"]
