"""Result monad for expected failures.

Services and repositories return ``Ok`` on success and ``Err`` with a
human-readable message when the user asked for something that cannot be
done (unknown task, invalid column, missing file). The CLI decides how
each ``Err`` is reported and which exit code it maps to.

Example usage:
    >>> def parse_issue(value: str) -> Result[int, str]:
    ...     if not value.isdigit():
    ...         return Err(f"Not an issue number: {value}")
    ...     return Ok(int(value))
    ...
    >>> parse_issue("42")
    Ok(value=42)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying ``error``."""

    error: E


# Using Union here as TypeVar aliases don't work with | syntax at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007

