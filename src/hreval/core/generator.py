"""Expansion of a create-evaluation request into dated period records."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Callable

import pendulum

from ..schemas import Evaluation, EvaluationStatus, GenerationRequest, ReviewType, ScheduleType
from .errors import ValidationError
from .reviewers import ReviewerDirectory
from .validation import is_blank, normalize_date, parse_draft

_SCHEDULES: dict[ScheduleType, tuple[tuple[str, ReviewType], ...]] = {
    ScheduleType.QUARTERLY: tuple((f"Q{quarter}", ReviewType.QUARTERLY) for quarter in range(1, 5)),
    ScheduleType.ANNUAL: (("Mid", ReviewType.MID_YEAR), ("End", ReviewType.ANNUAL)),
}


@dataclass
class GeneratorConfig:
    """Configuration for record generation."""

    max_optional_quarter: int = 6


def new_id() -> str:
    return uuid.uuid4().hex


class RecordGenerator:
    """Produce the Draft evaluations a create request calls for."""

    def __init__(
        self,
        directory: ReviewerDirectory,
        *,
        config: GeneratorConfig | None = None,
        id_factory: Callable[[], str] | None = None,
        now_provider: Any | None = None,
    ) -> None:
        self._directory = directory
        self._config = config or GeneratorConfig()
        self._id_factory = id_factory or new_id
        self._now_provider = now_provider or pendulum.now

    def generate(self, request: GenerationRequest | dict[str, Any]) -> list[Evaluation]:
        """Validate ``request`` and return the ordered Draft records.

        Nothing is produced when validation fails; the raised
        ``ValidationError`` lists every offending field.
        """
        parsed, date = self.validate(request)
        reviewer = self._directory.resolve(parsed.reviewer_id)

        if parsed.type is ScheduleType.OPTIONAL:
            schedule = ((f"Q{parsed.quarter}", ReviewType.OPTIONAL),)
        else:
            schedule = _SCHEDULES[parsed.type]

        return [
            Evaluation(
                id=self._id_factory(),
                type=review_type.value,
                period=f"{parsed.year}-{suffix}",
                status=EvaluationStatus.DRAFT,
                reviewer_id=reviewer.id if reviewer else parsed.reviewer_id,
                reviewer=reviewer.name if reviewer else "",
                date=date,
            )
            for suffix, review_type in schedule
        ]

    def validate(self, request: GenerationRequest | dict[str, Any]) -> tuple[GenerationRequest, str]:
        """Return the parsed request and its normalized date, or raise."""
        max_quarter = self._config.max_optional_quarter
        quarter_message = f"Quarter must be between 1-{max_quarter}"
        parsed, errors = parse_draft(
            GenerationRequest,
            request,
            {
                "type": "Evaluation type must be Quarterly, Annual or Optional",
                "year": "Year must be a four-digit number",
                "quarter": quarter_message,
                "reviewer_id": "Reviewer selection is required",
                "date": "Invalid date format",
            },
        )

        if "year" not in errors:
            if parsed.year is None:
                errors["year"] = "Year is required"
            elif not 1000 <= parsed.year <= 9999:
                errors["year"] = "Year must be a four-digit number"

        if "reviewer_id" not in errors:
            if is_blank(parsed.reviewer_id):
                errors["reviewer_id"] = "Reviewer selection is required"
            elif parsed.reviewer_id not in self._directory:
                errors["reviewer_id"] = "Unknown reviewer"

        if parsed.type is ScheduleType.OPTIONAL and "quarter" not in errors:
            if parsed.quarter is None:
                errors["quarter"] = "Quarter is required for optional reviews"
            elif not 1 <= parsed.quarter <= max_quarter:
                errors["quarter"] = quarter_message

        date = ""
        if "date" not in errors:
            if is_blank(parsed.date):
                date = self._now_provider().to_date_string()
            else:
                date = normalize_date(parsed.date) or ""
                if not date:
                    errors["date"] = "Invalid date format"

        if errors:
            raise ValidationError(errors)
        return parsed, date
