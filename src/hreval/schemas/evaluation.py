"""Evaluation, reviewer and create-request schemas."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EvaluationStatus(str, Enum):
    """Workflow status of an evaluation, valued by its display label."""

    DRAFT = "Draft"
    PENDING_HOD = "Pending HoD Approval"
    PENDING_HR = "Pending HR Approval"
    EMPLOYEE_REVIEW = "Employee Review"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    COMPLETED = "Completed"


class ScheduleType(str, Enum):
    """Kind of create request; decides how many records are generated."""

    QUARTERLY = "Quarterly"
    ANNUAL = "Annual"
    OPTIONAL = "Optional"


class ReviewType(str, Enum):
    """Label stored on each generated evaluation."""

    QUARTERLY = "Quarterly Review"
    MID_YEAR = "Mid-Year Review"
    ANNUAL = "Annual Review"
    OPTIONAL = "Optional Review"


class ReviewerRole(str, Enum):
    LM = "LM"
    HOD = "HOD"
    HR = "HR"


class Reviewer(BaseModel):
    """Reviewer available for assignment."""

    id: str
    name: str
    role: ReviewerRole

    model_config = ConfigDict(extra="forbid", coerce_numbers_to_str=True)


class Evaluation(BaseModel):
    """One performance-review instance for a single period."""

    id: str
    employee_id: str | None = None
    type: str
    period: str
    status: EvaluationStatus = EvaluationStatus.DRAFT
    reviewer_id: str | None = None
    reviewer: str | None = None
    date: str
    score: float | None = Field(default=None, ge=0, le=10)

    model_config = ConfigDict(extra="forbid", coerce_numbers_to_str=True)


class GenerationRequest(BaseModel):
    """Create-evaluation form input.

    Fields are permissive on purpose: the generator reports every missing or
    malformed field together instead of failing on the first one.
    """

    type: ScheduleType = ScheduleType.QUARTERLY
    year: int | None = None
    quarter: int | None = None
    reviewer_id: str | None = None
    date: str | None = None

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class EvaluationUpdate(BaseModel):
    """Edit-form input; only the fields that were set are applied."""

    type: str | None = None
    period: str | None = None
    status: EvaluationStatus | str | None = None
    reviewer_id: str | None = None
    date: str | None = None
    score: float | None = None

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)
