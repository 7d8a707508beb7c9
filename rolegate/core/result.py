"""Result types for railway-oriented programming.

Operations that can fail return a Result instead of raising. Callers
branch on the outcome with structural pattern matching.

Usage:
    def find(user_id: UUID) -> Result[User, NotFoundError]:
        user = users.get(user_id)
        if user is None:
            return Failure(error=NotFoundError(...))
        return Success(value=user)

    match find(user_id):
        case Success(value=user):
            ...
        case Failure(error=err):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

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
type Result[T, E] = Success[T] | Failure[E]
