"""Status transition rules for the evaluation approval pipeline."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from ..schemas import EvaluationStatus
from .errors import IllegalTransitionError, ValidationError

S = EvaluationStatus

# Approval pipeline: HoD -> HR -> employee -> approval -> archive, with
# rejection reachable from every gate and no forward skipping.
TRANSITIONS: Mapping[EvaluationStatus, frozenset[EvaluationStatus]] = MappingProxyType(
    {
        S.DRAFT: frozenset({S.PENDING_HOD, S.REJECTED}),
        S.PENDING_HOD: frozenset({S.PENDING_HR, S.REJECTED, S.DRAFT}),
        S.PENDING_HR: frozenset({S.EMPLOYEE_REVIEW, S.REJECTED, S.PENDING_HOD}),
        S.EMPLOYEE_REVIEW: frozenset({S.APPROVED, S.REJECTED}),
        S.APPROVED: frozenset({S.COMPLETED}),
        S.REJECTED: frozenset({S.DRAFT}),
        S.COMPLETED: frozenset(),
    }
)

INITIAL_STATUS = S.DRAFT

# Upper-case codes used by the REST payloads.
STATUS_CODES: Mapping[EvaluationStatus, str] = MappingProxyType(
    {
        S.DRAFT: "DRAFT",
        S.PENDING_HOD: "PENDING_HOD",
        S.PENDING_HR: "PENDING_HR",
        S.EMPLOYEE_REVIEW: "EMPLOYEE_REVIEW",
        S.APPROVED: "APPROVED",
        S.REJECTED: "REJECTED",
        S.COMPLETED: "COMPLETED",
    }
)
_BY_CODE = {code: status for status, code in STATUS_CODES.items()}


def parse_status(value: Any) -> EvaluationStatus:
    """Accept an enum member, a display label or a REST code."""
    if isinstance(value, EvaluationStatus):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return EvaluationStatus(text)
        except ValueError:
            pass
        status = _BY_CODE.get(text.upper())
        if status is not None:
            return status
    raise ValidationError({"status": f"Unknown status {value!r}"})


def next_statuses(status: Any) -> frozenset[EvaluationStatus]:
    return TRANSITIONS[parse_status(status)]


def selectable_statuses(status: Any) -> list[EvaluationStatus]:
    """Current status plus its legal targets, in workflow order."""
    current = parse_status(status)
    allowed = TRANSITIONS[current] | {current}
    return [candidate for candidate in EvaluationStatus if candidate in allowed]


def is_terminal(status: Any) -> bool:
    return not TRANSITIONS[parse_status(status)]


def is_valid_transition(from_status: Any, to_status: Any) -> bool:
    source = parse_status(from_status)
    target = parse_status(to_status)
    if source == target:
        return True
    return target in TRANSITIONS[source]


class TransitionPolicy:
    """Gatekeeper consulted before any status change is persisted."""

    def __init__(
        self,
        transitions: Mapping[EvaluationStatus, frozenset[EvaluationStatus]] | None = None,
    ) -> None:
        self._transitions = transitions or TRANSITIONS

    def allows(self, from_status: Any, to_status: Any) -> bool:
        source = parse_status(from_status)
        target = parse_status(to_status)
        return source == target or target in self._transitions.get(source, frozenset())

    def check(self, from_status: Any, to_status: Any) -> EvaluationStatus:
        """Return the parsed target status or raise ``IllegalTransitionError``."""
        source = parse_status(from_status)
        target = parse_status(to_status)
        if not self.allows(source, target):
            raise IllegalTransitionError(source, target)
        return target
