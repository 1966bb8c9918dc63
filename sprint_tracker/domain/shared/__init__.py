"""Shared domain building blocks."""

from sprint_tracker.domain.shared.result import (
    Err,
    Ok,
    Result,
)

__all__ = [
    "Ok",
    "Err",
    "Result",
]
