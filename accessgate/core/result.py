"""Result types for railway-oriented programming.

Operations that can fail return a ``Result`` instead of raising, which keeps
error handling explicit at every call site.

Usage:
    def load() -> Result[PolicyState, PolicyError]:
        if not path.exists():
            return Failure(error=PolicyError(...))
        return Success(value=state)

    match store_result:
        case Success(value=state):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
Result: TypeAlias = Success[T] | Failure[E]
