"""Error taxonomy raised by the evaluation engine."""

from __future__ import annotations

from typing import Any, Mapping


class EvaluationError(ValueError):
    """Base class for recoverable evaluation errors."""


class ValidationError(EvaluationError):
    """One or more fields violate a bound, required-field or business rule."""

    def __init__(self, errors: Mapping[str, str]):
        super().__init__("Validation failed")
        self.errors = dict(errors)

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Validation failed: {self.errors}"


class IllegalTransitionError(ValidationError):
    """Raised when a status change is not in the transition table."""

    def __init__(self, from_status: Any, to_status: Any):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            {"status": f"Invalid status transition from {_label(from_status)} to {_label(to_status)}"}
        )


class StaleRevisionError(ValidationError):
    """Raised when a caller edits an aggregate that changed underneath it."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            {"revision": f"Evaluation was modified (expected revision {expected}, found {actual})"}
        )


def _label(status: Any) -> str:
    return str(getattr(status, "value", status))


__all__ = [
    "EvaluationError",
    "ValidationError",
    "IllegalTransitionError",
    "StaleRevisionError",
]
