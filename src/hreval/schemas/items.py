"""Objective and competency schemas."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ObjectiveStatus(str, Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class CompetencyCategory(str, Enum):
    CORE = "Core"
    LEADERSHIP = "Leadership"
    FUNCTIONAL = "Functional"


class Objective(BaseModel):
    """Weighted performance goal attached to one evaluation."""

    id: str
    evaluation_id: str | None = None
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    target: int = Field(ge=1, le=10)
    achieved: int = Field(ge=1, le=10)
    weight: int = Field(ge=1, le=100)
    status: ObjectiveStatus = ObjectiveStatus.NOT_STARTED

    model_config = ConfigDict(extra="forbid", coerce_numbers_to_str=True)


class Competency(BaseModel):
    """Weighted required-vs-actual skill assessment."""

    id: str
    evaluation_id: str | None = None
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    category: CompetencyCategory = CompetencyCategory.CORE
    required_level: int = Field(ge=1, le=10)
    actual_level: int = Field(ge=1, le=10)
    weight: int = Field(ge=1, le=100)

    model_config = ConfigDict(extra="forbid", coerce_numbers_to_str=True)


class ObjectiveDraft(BaseModel):
    """Objective form input prior to validation."""

    title: str | None = None
    description: str | None = None
    target: int | None = None
    achieved: int | None = None
    weight: int | None = None
    status: ObjectiveStatus = ObjectiveStatus.NOT_STARTED

    model_config = ConfigDict(extra="ignore")


class CompetencyDraft(BaseModel):
    """Competency form input prior to validation."""

    name: str | None = None
    description: str | None = None
    category: CompetencyCategory = CompetencyCategory.CORE
    required_level: int | None = None
    actual_level: int | None = None
    weight: int | None = None

    model_config = ConfigDict(extra="ignore")
