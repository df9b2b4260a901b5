"""Pydantic schema definitions for evaluations and their sub-records."""

from __future__ import annotations

from .evaluation import (
    Evaluation,
    EvaluationStatus,
    EvaluationUpdate,
    GenerationRequest,
    Reviewer,
    ReviewerRole,
    ReviewType,
    ScheduleType,
)
from .items import (
    Competency,
    CompetencyCategory,
    CompetencyDraft,
    Objective,
    ObjectiveDraft,
    ObjectiveStatus,
)

__all__ = [
    "Competency",
    "CompetencyCategory",
    "CompetencyDraft",
    "Evaluation",
    "EvaluationStatus",
    "EvaluationUpdate",
    "GenerationRequest",
    "Objective",
    "ObjectiveDraft",
    "ObjectiveStatus",
    "Reviewer",
    "ReviewerRole",
    "ReviewType",
    "ScheduleType",
]
