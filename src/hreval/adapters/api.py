"""REST payload adapter for evaluations and objectives."""

from __future__ import annotations

import json
from typing import Any

from ..core.transitions import STATUS_CODES, parse_status
from ..schemas import Evaluation, Objective, ObjectiveStatus

_OBJECTIVE_CODES: dict[ObjectiveStatus, str] = {
    ObjectiveStatus.NOT_STARTED: "NOT_STARTED",
    ObjectiveStatus.IN_PROGRESS: "IN_PROGRESS",
    ObjectiveStatus.COMPLETED: "COMPLETED",
}
_OBJECTIVES_BY_CODE = {code: status for status, code in _OBJECTIVE_CODES.items()}


class ApiPayloadAdapter:
    """Convert between engine models and the REST payload shape.

    The REST layer encodes statuses as upper-case codes (``PENDING_HOD``,
    ``IN_PROGRESS``); the engine keeps the display labels.
    """

    def encode_evaluation(self, evaluation: Evaluation) -> dict[str, Any]:
        payload = evaluation.model_dump(mode="json")
        payload["status"] = STATUS_CODES[evaluation.status]
        return payload

    def decode_evaluation(self, blob: bytes | str | dict[str, Any]) -> Evaluation:
        data = dict(self._load(blob))
        if "status" in data and data["status"] is not None:
            data["status"] = parse_status(data["status"])
        allowed = set(Evaluation.model_fields)
        return Evaluation.model_validate({key: value for key, value in data.items() if key in allowed})

    def encode_objective(self, objective: Objective) -> dict[str, Any]:
        payload = objective.model_dump(mode="json")
        payload["status"] = _OBJECTIVE_CODES[objective.status]
        return payload

    def decode_objective(self, blob: bytes | str | dict[str, Any]) -> Objective:
        data = dict(self._load(blob))
        status = data.get("status")
        if isinstance(status, str) and status.upper() in _OBJECTIVES_BY_CODE:
            data["status"] = _OBJECTIVES_BY_CODE[status.upper()]
        allowed = set(Objective.model_fields)
        return Objective.model_validate({key: value for key, value in data.items() if key in allowed})

    @staticmethod
    def _load(blob: bytes | str | dict[str, Any]) -> dict[str, Any]:
        if isinstance(blob, dict):
            return blob
        if isinstance(blob, bytes):
            blob = blob.decode("utf-8")
        try:
            data = json.loads(blob)
        except json.JSONDecodeError as exc:
            raise ValueError("Invalid evaluation payload") from exc
        if not isinstance(data, dict):
            raise ValueError("Evaluation payload must be a JSON object")
        return data
