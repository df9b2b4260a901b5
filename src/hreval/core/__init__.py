"""Core evaluation lifecycle engine components."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .aggregate import EvaluationAggregate, EvaluationEngine
from .errors import (
    EvaluationError,
    IllegalTransitionError,
    StaleRevisionError,
    ValidationError,
)
from .generator import GeneratorConfig, RecordGenerator
from .reviewers import ReviewerDirectory
from .scoring import (
    ScoredItem,
    WeightedScore,
    competency_score,
    composite_score,
    item_score,
    objective_score,
)
from .transitions import (
    TRANSITIONS,
    TransitionPolicy,
    is_terminal,
    is_valid_transition,
    next_statuses,
    parse_status,
    selectable_statuses,
)

__all__ = [
    "EvaluationAggregate",
    "EvaluationEngine",
    "EvaluationError",
    "GeneratorConfig",
    "IllegalTransitionError",
    "RecordGenerator",
    "ReviewerDirectory",
    "ScoredItem",
    "StaleRevisionError",
    "TRANSITIONS",
    "TransitionPolicy",
    "ValidationError",
    "WeightedScore",
    "competency_score",
    "composite_score",
    "is_terminal",
    "is_valid_transition",
    "item_score",
    "next_statuses",
    "objective_score",
    "parse_status",
    "selectable_statuses",
]
