from __future__ import annotations

import json

import pytest

from hreval.adapters import ApiPayloadAdapter
from hreval.schemas import Evaluation, EvaluationStatus, Objective, ObjectiveStatus


def test_encode_evaluation_uses_status_codes():
    adapter = ApiPayloadAdapter()
    evaluation = Evaluation(
        id="EV-1",
        type="Quarterly Review",
        period="2024-Q1",
        status=EvaluationStatus.PENDING_HOD,
        reviewer_id="2",
        date="2024-03-20",
    )

    payload = adapter.encode_evaluation(evaluation)

    assert payload["status"] == "PENDING_HOD"
    assert payload["period"] == "2024-Q1"
    assert payload["reviewer_id"] == "2"


def test_decode_evaluation_from_rest_payload():
    adapter = ApiPayloadAdapter()
    blob = json.dumps(
        {
            "id": 7,
            "employee_id": "12",
            "type": "Mid-Year Review",
            "status": "EMPLOYEE_REVIEW",
            "period": "2024-Mid",
            "date": "2024-07-01",
            "created_at": "2024-07-01T10:00:00Z",
            "updated_at": "2024-07-02T10:00:00Z",
        }
    )

    evaluation = adapter.decode_evaluation(blob)

    assert evaluation.id == "7"
    assert evaluation.status is EvaluationStatus.EMPLOYEE_REVIEW
    assert evaluation.score is None


def test_decode_evaluation_accepts_display_labels():
    adapter = ApiPayloadAdapter()

    evaluation = adapter.decode_evaluation(
        {"id": "3", "type": "Optional Review", "status": "Draft", "period": "2024-Q3", "date": "2024-08-15"}
    )

    assert evaluation.status is EvaluationStatus.DRAFT


def test_objective_round_trip_codes():
    adapter = ApiPayloadAdapter()
    objective = Objective(
        id="O-1",
        evaluation_id="EV-1",
        title="Team Leadership",
        description="Mentor junior staff.",
        target=9,
        achieved=8,
        weight=35,
        status=ObjectiveStatus.IN_PROGRESS,
    )

    payload = adapter.encode_objective(objective)
    assert payload["status"] == "IN_PROGRESS"
    assert adapter.decode_objective(payload) == objective


def test_invalid_payload_raises_value_error():
    adapter = ApiPayloadAdapter()

    with pytest.raises(ValueError):
        adapter.decode_evaluation("{invalid")
