"""In-memory evaluation store."""

from __future__ import annotations

from typing import Sequence

from ..schemas import Competency, Evaluation, Objective


class InMemoryEvaluationStore:
    """Dictionary-backed store; last write wins, no version checks."""

    def __init__(self) -> None:
        self._evaluations: dict[str, list[Evaluation]] = {}
        self._objectives: dict[str, list[Objective]] = {}
        self._competencies: dict[str, list[Competency]] = {}

    def list(self, employee_id: str) -> list[Evaluation]:
        return list(self._evaluations.get(employee_id, []))

    def get(self, employee_id: str, evaluation_id: str) -> Evaluation | None:
        for evaluation in self._evaluations.get(employee_id, []):
            if evaluation.id == evaluation_id:
                return evaluation
        return None

    def append(self, employee_id: str, evaluations: Sequence[Evaluation]) -> None:
        self._evaluations.setdefault(employee_id, []).extend(evaluations)

    def replace(self, employee_id: str, evaluation: Evaluation) -> None:
        stored = self._evaluations.get(employee_id, [])
        for index, existing in enumerate(stored):
            if existing.id == evaluation.id:
                stored[index] = evaluation
                return
        raise KeyError(f"Unknown evaluation: {evaluation.id!r}")

    def remove(self, employee_id: str, evaluation_id: str) -> None:
        stored = self._evaluations.get(employee_id)
        if stored is None:
            return
        self._evaluations[employee_id] = [item for item in stored if item.id != evaluation_id]

    def items(self, evaluation_id: str) -> tuple[list[Objective], list[Competency]]:
        return (
            list(self._objectives.get(evaluation_id, [])),
            list(self._competencies.get(evaluation_id, [])),
        )

    def save_items(
        self,
        evaluation_id: str,
        objectives: Sequence[Objective],
        competencies: Sequence[Competency],
    ) -> None:
        self._objectives[evaluation_id] = list(objectives)
        self._competencies[evaluation_id] = list(competencies)

    def remove_items(self, evaluation_id: str) -> None:
        self._objectives.pop(evaluation_id, None)
        self._competencies.pop(evaluation_id, None)
