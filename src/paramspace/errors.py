"""Error types raised by search space construction, validation and sampling.

All errors are programming errors: they are raised synchronously at the
violating call and never retried or recovered internally.
"""

from collections.abc import Sequence
from typing import Any


class SearchSpaceError(Exception):
    """Base class for all search space errors."""


class DuplicateIdError(SearchSpaceError):
    """Raised when a parameter id is added twice."""

    def __init__(self, parameter_id: str) -> None:
        super().__init__(f"Parameter '{parameter_id}' already exists in the search space")
        self.parameter_id = parameter_id


class UnknownParameterError(SearchSpaceError):
    """Raised when an operation references a parameter id that is not in the space."""

    def __init__(self, parameter_id: str, context: str | None = None) -> None:
        message = f"Unknown parameter '{parameter_id}'"
        if context:
            message = f"{message} ({context})"
        super().__init__(message)
        self.parameter_id = parameter_id


class CycleError(SearchSpaceError):
    """Raised when a condition would make a parameter depend on its own activation."""

    def __init__(self, cycle: Sequence[str]) -> None:
        """Initialize cycle error.

        Args:
            cycle: Parameter ids along the cycle, first and last element equal.
        """
        super().__init__(f"Condition creates a dependency cycle: {' -> '.join(cycle)}")
        self.cycle = list(cycle)


class DomainError(SearchSpaceError):
    """Raised when a value lies outside its parameter's bounds or levels."""

    def __init__(self, parameter_id: str, value: Any, reason: str) -> None:
        super().__init__(f"Invalid value {value!r} for parameter '{parameter_id}': {reason}")
        self.parameter_id = parameter_id
        self.value = value
        self.reason = reason


class OrphanValueError(SearchSpaceError):
    """Raised when a value is present for a parameter that is currently inactive."""

    def __init__(self, parameter_id: str, value: Any) -> None:
        super().__init__(
            f"Parameter '{parameter_id}' is inactive for this configuration but has value {value!r}"
        )
        self.parameter_id = parameter_id
        self.value = value


class MissingValueError(SearchSpaceError):
    """Raised by complete validation when an active parameter has no value."""

    def __init__(self, parameter_id: str) -> None:
        super().__init__(f"Parameter '{parameter_id}' is active but has no value")
        self.parameter_id = parameter_id


class SpaceClosedError(SearchSpaceError):
    """Raised when a closed search space is modified."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Cannot {operation}: search space is closed")
        self.operation = operation
