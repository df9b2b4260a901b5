"""Consistency boundary around one evaluation and its sub-records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..schemas import (
    Competency,
    CompetencyDraft,
    Evaluation,
    EvaluationUpdate,
    GenerationRequest,
    Objective,
    ObjectiveDraft,
)
from .errors import StaleRevisionError, ValidationError
from .generator import RecordGenerator, new_id
from .reviewers import ReviewerDirectory
from .scoring import composite_score
from .transitions import TransitionPolicy, parse_status
from .validation import in_range, is_blank, normalize_date, parse_draft


@dataclass(slots=True)
class EvaluationAggregate:
    """An evaluation together with the objectives and competencies it owns."""

    evaluation: Evaluation
    objectives: list[Objective] = field(default_factory=list)
    competencies: list[Competency] = field(default_factory=list)
    revision: int = 0

    @property
    def id(self) -> str:
        return self.evaluation.id

    def find_objective(self, objective_id: str | int) -> Objective | None:
        return next((item for item in self.objectives if item.id == str(objective_id)), None)

    def find_competency(self, competency_id: str | int) -> Competency | None:
        return next((item for item in self.competencies if item.id == str(competency_id)), None)


@dataclass(frozen=True)
class _ItemRules:
    label: str
    draft: type[BaseModel]
    model: type[BaseModel]
    text_fields: tuple[str, ...]
    bounds: Mapping[str, tuple[int, int]]
    messages: Mapping[str, str]

    def check(self, draft: BaseModel) -> dict[str, str]:
        errors: dict[str, str] = {}
        for name in self.text_fields:
            if is_blank(getattr(draft, name)):
                errors[name] = self.messages[name]
        for name, (low, high) in self.bounds.items():
            if not in_range(getattr(draft, name), low, high):
                errors[name] = self.messages[name]
        return errors


OBJECTIVE_RULES = _ItemRules(
    label="Objective",
    draft=ObjectiveDraft,
    model=Objective,
    text_fields=("title", "description"),
    bounds={"target": (1, 10), "achieved": (1, 10), "weight": (1, 100)},
    messages={
        "title": "Title is required",
        "description": "Description is required",
        "target": "Target must be between 1-10",
        "achieved": "Achieved must be between 1-10",
        "weight": "Weight must be between 1-100%",
        "status": "Status must be not-started, in-progress or completed",
    },
)

COMPETENCY_RULES = _ItemRules(
    label="Competency",
    draft=CompetencyDraft,
    model=Competency,
    text_fields=("name", "description"),
    bounds={"required_level": (1, 10), "actual_level": (1, 10), "weight": (1, 100)},
    messages={
        "name": "Name is required",
        "description": "Description is required",
        "required_level": "Required level must be between 1-10",
        "actual_level": "Actual level must be between 1-10",
        "weight": "Weight must be between 1-100%",
        "category": "Category must be Core, Leadership or Functional",
    },
)

_EVALUATION_MESSAGES: dict[str, str] = {
    "type": "Evaluation type is required",
    "period": "Period is required",
    "reviewer_id": "Reviewer selection is required",
    "date": "Date is required",
    "status": "Unknown status",
    "score": "Score must be between 0-10",
}

_REQUIRED_FIELDS = ("type", "period", "reviewer_id", "date")


class EvaluationEngine:
    """Operations that keep an evaluation aggregate internally consistent.

    All operations mutate the aggregate in memory only. A failing operation
    raises a ``ValidationError`` (or one of its specializations) and leaves
    the aggregate exactly as it was.
    """

    def __init__(
        self,
        directory: ReviewerDirectory,
        *,
        generator: RecordGenerator | None = None,
        policy: TransitionPolicy | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._directory = directory
        self._id_factory = id_factory or new_id
        self._generator = generator or RecordGenerator(directory, id_factory=self._id_factory)
        self._policy = policy or TransitionPolicy()

    # -- evaluation lifecycle -------------------------------------------------

    def create(self, request: GenerationRequest | dict[str, Any]) -> list[EvaluationAggregate]:
        return [EvaluationAggregate(evaluation=record) for record in self._generator.generate(request)]

    def open(
        self,
        evaluation: Evaluation | dict[str, Any],
        objectives: Iterable[Objective | dict[str, Any]] = (),
        competencies: Iterable[Competency | dict[str, Any]] = (),
    ) -> EvaluationAggregate:
        """Wrap persisted records in an aggregate, validating them on the way in."""
        return EvaluationAggregate(
            evaluation=_coerce(Evaluation, evaluation),
            objectives=[_coerce(Objective, item) for item in objectives],
            competencies=[_coerce(Competency, item) for item in competencies],
        )

    def update_status(
        self,
        aggregate: EvaluationAggregate,
        new_status: Any,
        *,
        expected_revision: int | None = None,
    ) -> EvaluationAggregate:
        return self.update_details(
            aggregate,
            {"status": new_status},
            expected_revision=expected_revision,
        )

    def update_details(
        self,
        aggregate: EvaluationAggregate,
        changes: EvaluationUpdate | dict[str, Any],
        *,
        expected_revision: int | None = None,
    ) -> EvaluationAggregate:
        """Apply an edit-form submission.

        The completeness gate runs first; the transition table is consulted
        only once type, period, reviewer and date are all present.
        """
        _check_revision(aggregate, expected_revision)
        parsed, errors = parse_draft(EvaluationUpdate, changes, _EVALUATION_MESSAGES)
        updates = parsed.model_dump(exclude_unset=True)
        current = aggregate.evaluation
        proposed = current.model_dump()

        for name in ("type", "period", "reviewer_id", "date"):
            if name in updates:
                proposed[name] = updates[name]

        for name in _REQUIRED_FIELDS:
            if name not in errors and is_blank(proposed[name]):
                errors[name] = _EVALUATION_MESSAGES[name]

        if "reviewer_id" in updates and "reviewer_id" not in errors:
            reviewer = self._directory.resolve(proposed["reviewer_id"])
            if reviewer is None:
                errors["reviewer_id"] = "Unknown reviewer"
            else:
                proposed["reviewer_id"] = reviewer.id
                proposed["reviewer"] = reviewer.name

        if "date" in updates and "date" not in errors:
            normalized = normalize_date(proposed["date"])
            if normalized is None:
                errors["date"] = "Invalid date format"
            else:
                proposed["date"] = normalized

        if "score" in updates and "score" not in errors:
            score = updates["score"]
            if score is not None and not 0 <= score <= 10:
                errors["score"] = _EVALUATION_MESSAGES["score"]
            else:
                proposed["score"] = score

        target = current.status
        if "status" in updates and "status" not in errors:
            if updates["status"] is None:
                errors["status"] = "Status is required"
            else:
                try:
                    target = parse_status(updates["status"])
                except ValidationError as exc:
                    errors.update(exc.errors)

        if errors:
            raise ValidationError(errors)

        proposed["status"] = self._policy.check(current.status, target)
        aggregate.evaluation = Evaluation.model_validate(proposed)
        aggregate.revision += 1
        return aggregate

    # -- objectives -----------------------------------------------------------

    def add_objective(
        self,
        aggregate: EvaluationAggregate,
        draft: ObjectiveDraft | dict[str, Any],
        *,
        expected_revision: int | None = None,
    ) -> Objective:
        return self._add_item(aggregate, aggregate.objectives, OBJECTIVE_RULES, draft, expected_revision)

    def update_objective(
        self,
        aggregate: EvaluationAggregate,
        objective_id: str | int,
        draft: ObjectiveDraft | dict[str, Any],
        *,
        expected_revision: int | None = None,
    ) -> Objective:
        return self._update_item(
            aggregate, aggregate.objectives, OBJECTIVE_RULES, objective_id, draft, expected_revision
        )

    def delete_objective(
        self,
        aggregate: EvaluationAggregate,
        objective_id: str | int,
        *,
        expected_revision: int | None = None,
    ) -> bool:
        return self._delete_item(aggregate, aggregate.objectives, objective_id, expected_revision)

    # -- competencies ---------------------------------------------------------

    def add_competency(
        self,
        aggregate: EvaluationAggregate,
        draft: CompetencyDraft | dict[str, Any],
        *,
        expected_revision: int | None = None,
    ) -> Competency:
        return self._add_item(aggregate, aggregate.competencies, COMPETENCY_RULES, draft, expected_revision)

    def update_competency(
        self,
        aggregate: EvaluationAggregate,
        competency_id: str | int,
        draft: CompetencyDraft | dict[str, Any],
        *,
        expected_revision: int | None = None,
    ) -> Competency:
        return self._update_item(
            aggregate, aggregate.competencies, COMPETENCY_RULES, competency_id, draft, expected_revision
        )

    def delete_competency(
        self,
        aggregate: EvaluationAggregate,
        competency_id: str | int,
        *,
        expected_revision: int | None = None,
    ) -> bool:
        return self._delete_item(aggregate, aggregate.competencies, competency_id, expected_revision)

    # -- scores ---------------------------------------------------------------

    @staticmethod
    def overall_objective_score(aggregate: EvaluationAggregate) -> float:
        return composite_score(aggregate.objectives)

    @staticmethod
    def overall_competency_score(aggregate: EvaluationAggregate) -> float:
        return composite_score(aggregate.competencies)

    # -- internals ------------------------------------------------------------

    def _add_item(
        self,
        aggregate: EvaluationAggregate,
        items: list[Any],
        rules: _ItemRules,
        draft: Any,
        expected_revision: int | None,
    ) -> Any:
        _check_revision(aggregate, expected_revision)
        parsed, errors = parse_draft(rules.draft, draft, rules.messages)
        errors = {**rules.check(parsed), **errors}
        if errors:
            raise ValidationError(errors)

        item = rules.model(
            id=self._id_factory(),
            evaluation_id=aggregate.evaluation.id,
            **parsed.model_dump(),
        )
        items.append(item)
        aggregate.revision += 1
        return item

    def _update_item(
        self,
        aggregate: EvaluationAggregate,
        items: list[Any],
        rules: _ItemRules,
        item_id: str | int,
        draft: Any,
        expected_revision: int | None,
    ) -> Any:
        _check_revision(aggregate, expected_revision)
        index = next((pos for pos, item in enumerate(items) if item.id == str(item_id)), None)
        if index is None:
            raise ValidationError({"id": f"{rules.label} {item_id} not found"})

        existing = items[index]
        parsed, errors = parse_draft(rules.draft, draft, rules.messages)
        merged = rules.draft.model_validate(
            {
                **existing.model_dump(include=set(rules.draft.model_fields)),
                **parsed.model_dump(exclude_unset=True),
            }
        )
        errors = {**rules.check(merged), **errors}
        if errors:
            raise ValidationError(errors)

        item = rules.model(
            id=existing.id,
            evaluation_id=existing.evaluation_id,
            **merged.model_dump(),
        )
        items[index] = item
        aggregate.revision += 1
        return item

    @staticmethod
    def _delete_item(
        aggregate: EvaluationAggregate,
        items: list[Any],
        item_id: str | int,
        expected_revision: int | None,
    ) -> bool:
        _check_revision(aggregate, expected_revision)
        remaining = [item for item in items if item.id != str(item_id)]
        if len(remaining) == len(items):
            return False
        items[:] = remaining
        aggregate.revision += 1
        return True


def _check_revision(aggregate: EvaluationAggregate, expected: int | None) -> None:
    if expected is not None and expected != aggregate.revision:
        raise StaleRevisionError(expected, aggregate.revision)


def _coerce(model: type[BaseModel], value: Any) -> Any:
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value)
    except PydanticValidationError as exc:
        raise ValidationError(
            {
                ".".join(str(part) for part in detail["loc"]) or "payload": detail["msg"]
                for detail in exc.errors()
            }
        ) from exc
