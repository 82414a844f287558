"""Result type for stack edits that may be refused.

Edits such as moving an anchored task or scaling a missing index are
expected failures, not bugs. They come back as Err values carrying a
message instead of raising.

Example usage:
    >>> def clamp(minutes: int) -> Result[int, str]:
    ...     if minutes < 0:
    ...         return Err("Negative duration")
    ...     return Ok(max(2, minutes))
    ...
    >>> result = clamp(1)
    >>> if is_ok(result):
    ...     print(f"Clamped: {result.value}")
    Clamped: 2
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome holding ``value``."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Refused outcome holding ``error``."""

    error: E


# Union instead of | because TypeVar aliases are evaluated at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def is_ok(result: Ok[T] | Err[E]) -> bool:
    """Return True when the result is Ok."""
    return isinstance(result, Ok)


def is_err(result: Ok[T] | Err[E]) -> bool:
    """Return True when the result is Err."""
    return isinstance(result, Err)
