"""Result types for railway-oriented programming.

Repository and handler operations return a Result instead of raising, so
every authentication failure is an explicit value the caller must match on.

Usage:
    result = await repository.login(email, password)
    match result:
        case Success(value=user):
            store.set_user(user)
        case Failure(error=MFARequiredError() as mfa):
            start_challenge(mfa.challenge)
        case Failure(error=error):
            store.set_error(error)
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
