"""Evaluation service: engine operations wired to a persistence collaborator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

import structlog

from .adapters import EvaluationStore
from .core import EvaluationAggregate, EvaluationEngine, ValidationError
from .schemas import Evaluation, EvaluationUpdate, GenerationRequest


@dataclass(slots=True)
class OperationResult:
    """Outcome handed back to form handlers."""

    ok: bool
    value: Any = None
    errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def success(cls, value: Any = None) -> OperationResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, errors: dict[str, str]) -> OperationResult:
        return cls(ok=False, errors=dict(errors))


class EvaluationService:
    """Run engine operations against stored evaluations.

    Every failure is returned as an ``OperationResult`` carrying field-level
    messages; the stored state is only written after an operation succeeds.
    Concurrent edits are not reconciled: the last write wins.
    """

    def __init__(self, *, engine: EvaluationEngine, store: EvaluationStore) -> None:
        self._engine = engine
        self._store = store
        self._logger = structlog.get_logger(__name__)

    def list_evaluations(self, employee_id: str) -> list[Evaluation]:
        return self._store.list(employee_id)

    def load(self, employee_id: str, evaluation_id: str) -> EvaluationAggregate | None:
        evaluation = self._store.get(employee_id, evaluation_id)
        if evaluation is None:
            return None
        objectives, competencies = self._store.items(evaluation_id)
        return self._engine.open(evaluation, objectives, competencies)

    def create_evaluations(
        self,
        employee_id: str,
        request: GenerationRequest | dict[str, Any],
    ) -> OperationResult:
        try:
            aggregates = self._engine.create(request)
        except ValidationError as exc:
            return self._reject("evaluation.create", employee_id, None, exc.errors)

        records = [
            aggregate.evaluation.model_copy(update={"employee_id": employee_id})
            for aggregate in aggregates
        ]
        self._store.append(employee_id, records)
        self._logger.info(
            "evaluation.created",
            employee_id=employee_id,
            evaluation_ids=[record.id for record in records],
            periods=[record.period for record in records],
            reviewer_id=records[0].reviewer_id if records else None,
        )
        return OperationResult.success(records)

    def update_evaluation(
        self,
        employee_id: str,
        evaluation_id: str,
        changes: EvaluationUpdate | dict[str, Any],
    ) -> OperationResult:
        return self._mutate(
            "evaluation.updated",
            employee_id,
            evaluation_id,
            lambda aggregate: self._engine.update_details(aggregate, changes).evaluation,
        )

    def update_status(self, employee_id: str, evaluation_id: str, status: Any) -> OperationResult:
        return self._mutate(
            "evaluation.status_changed",
            employee_id,
            evaluation_id,
            lambda aggregate: self._engine.update_status(aggregate, status).evaluation,
        )

    def delete_evaluation(self, employee_id: str, evaluation_id: str) -> OperationResult:
        """Remove an evaluation together with its objectives and competencies."""
        if self._store.get(employee_id, evaluation_id) is None:
            return self._reject("evaluation.delete", employee_id, evaluation_id, _NOT_FOUND)
        self._store.remove(employee_id, evaluation_id)
        self._store.remove_items(evaluation_id)
        self._logger.info("evaluation.deleted", employee_id=employee_id, evaluation_id=evaluation_id)
        return OperationResult.success(True)

    def add_objective(self, employee_id: str, evaluation_id: str, draft: Any) -> OperationResult:
        return self._mutate(
            "objective.added",
            employee_id,
            evaluation_id,
            lambda aggregate: self._engine.add_objective(aggregate, draft),
        )

    def update_objective(
        self, employee_id: str, evaluation_id: str, objective_id: str, draft: Any
    ) -> OperationResult:
        return self._mutate(
            "objective.updated",
            employee_id,
            evaluation_id,
            lambda aggregate: self._engine.update_objective(aggregate, objective_id, draft),
        )

    def delete_objective(self, employee_id: str, evaluation_id: str, objective_id: str) -> OperationResult:
        return self._mutate(
            "objective.deleted",
            employee_id,
            evaluation_id,
            lambda aggregate: self._engine.delete_objective(aggregate, objective_id),
        )

    def add_competency(self, employee_id: str, evaluation_id: str, draft: Any) -> OperationResult:
        return self._mutate(
            "competency.added",
            employee_id,
            evaluation_id,
            lambda aggregate: self._engine.add_competency(aggregate, draft),
        )

    def update_competency(
        self, employee_id: str, evaluation_id: str, competency_id: str, draft: Any
    ) -> OperationResult:
        return self._mutate(
            "competency.updated",
            employee_id,
            evaluation_id,
            lambda aggregate: self._engine.update_competency(aggregate, competency_id, draft),
        )

    def delete_competency(self, employee_id: str, evaluation_id: str, competency_id: str) -> OperationResult:
        return self._mutate(
            "competency.deleted",
            employee_id,
            evaluation_id,
            lambda aggregate: self._engine.delete_competency(aggregate, competency_id),
        )

    def scores(self, employee_id: str, evaluation_id: str) -> OperationResult:
        aggregate = self.load(employee_id, evaluation_id)
        if aggregate is None:
            return self._reject("evaluation.scores", employee_id, evaluation_id, _NOT_FOUND)
        return OperationResult.success(
            {
                "objectives": self._engine.overall_objective_score(aggregate),
                "competencies": self._engine.overall_competency_score(aggregate),
                "score": aggregate.evaluation.score,
            }
        )

    def _mutate(
        self,
        event: str,
        employee_id: str,
        evaluation_id: str,
        action: Callable[[EvaluationAggregate], Any],
    ) -> OperationResult:
        aggregate = self.load(employee_id, evaluation_id)
        if aggregate is None:
            return self._reject(event, employee_id, evaluation_id, _NOT_FOUND)
        try:
            value = action(aggregate)
        except ValidationError as exc:
            return self._reject(event, employee_id, evaluation_id, exc.errors)

        self._store.replace(employee_id, aggregate.evaluation)
        self._store.save_items(aggregate.id, aggregate.objectives, aggregate.competencies)
        self._logger.info(
            event,
            employee_id=employee_id,
            evaluation_id=evaluation_id,
            status=aggregate.evaluation.status.value,
            objectives=len(aggregate.objectives),
            competencies=len(aggregate.competencies),
        )
        return OperationResult.success(value)

    def _reject(
        self,
        event: str,
        employee_id: str,
        evaluation_id: str | None,
        errors: dict[str, str],
    ) -> OperationResult:
        self._logger.warning(
            "evaluation.rejected_operation",
            operation=event,
            employee_id=employee_id,
            evaluation_id=evaluation_id,
            errors=errors,
        )
        return OperationResult.failure(errors)


_NOT_FOUND = {"evaluation_id": "Evaluation not found"}
