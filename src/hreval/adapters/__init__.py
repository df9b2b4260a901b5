"""Persistence collaborators and wire codecs."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from ..schemas import Competency, Evaluation, Objective
from .api import ApiPayloadAdapter
from .memory import InMemoryEvaluationStore


@runtime_checkable
class EvaluationStore(Protocol):
    """Store holding each employee's evaluation list.

    Evaluations are addressed by ``employee_id`` plus ``evaluation_id``;
    objectives and competencies are addressed by their evaluation id.
    """

    def list(self, employee_id: str) -> list[Evaluation]:
        """Return the employee's evaluations in insertion order."""

    def get(self, employee_id: str, evaluation_id: str) -> Evaluation | None:
        """Return one evaluation or ``None``."""

    def append(self, employee_id: str, evaluations: Sequence[Evaluation]) -> None:
        """Append new evaluations to the employee's list."""

    def replace(self, employee_id: str, evaluation: Evaluation) -> None:
        """Replace the stored evaluation with the same id."""

    def remove(self, employee_id: str, evaluation_id: str) -> None:
        """Remove an evaluation from the employee's list."""

    def items(self, evaluation_id: str) -> tuple[list[Objective], list[Competency]]:
        """Return the objectives and competencies of an evaluation."""

    def save_items(
        self,
        evaluation_id: str,
        objectives: Sequence[Objective],
        competencies: Sequence[Competency],
    ) -> None:
        """Overwrite the sub-records of an evaluation."""

    def remove_items(self, evaluation_id: str) -> None:
        """Drop every sub-record of an evaluation."""


__all__ = ["EvaluationStore", "ApiPayloadAdapter", "InMemoryEvaluationStore"]
