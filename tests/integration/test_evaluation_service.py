from __future__ import annotations

from hreval.adapters import InMemoryEvaluationStore
from hreval.core import EvaluationEngine, RecordGenerator, ReviewerDirectory
from hreval.schemas import EvaluationStatus
from hreval.service import EvaluationService

REVIEWERS = [
    {"id": "1", "name": "Michael Chen", "role": "LM"},
    {"id": "2", "name": "Emily Rodriguez", "role": "HOD"},
]


def build_service() -> tuple[EvaluationService, InMemoryEvaluationStore]:
    counter = iter(range(1, 1000))

    def id_factory() -> str:
        return f"ID-{next(counter)}"

    directory = ReviewerDirectory(REVIEWERS)
    generator = RecordGenerator(directory, id_factory=id_factory)
    engine = EvaluationEngine(directory, generator=generator, id_factory=id_factory)
    store = InMemoryEvaluationStore()
    return EvaluationService(engine=engine, store=store), store


def create_quarterly(service: EvaluationService) -> list:
    result = service.create_evaluations(
        "EMP-1", {"type": "Quarterly", "year": 2024, "reviewer_id": "1", "date": "2024-01-15"}
    )
    assert result.ok
    return result.value


def test_create_persists_records_for_employee():
    service, store = build_service()

    records = create_quarterly(service)

    assert [record.period for record in records] == ["2024-Q1", "2024-Q2", "2024-Q3", "2024-Q4"]
    assert all(record.employee_id == "EMP-1" for record in records)
    assert store.list("EMP-1") == records


def test_create_failure_returns_errors_and_stores_nothing():
    service, store = build_service()

    result = service.create_evaluations("EMP-1", {"type": "Annual", "year": 2024})

    assert not result.ok
    assert result.errors == {"reviewer_id": "Reviewer selection is required"}
    assert store.list("EMP-1") == []


def test_status_change_is_persisted():
    service, store = build_service()
    first = create_quarterly(service)[0]

    result = service.update_status("EMP-1", first.id, "PENDING_HOD")

    assert result.ok
    assert result.value.status is EvaluationStatus.PENDING_HOD
    assert store.get("EMP-1", first.id).status is EvaluationStatus.PENDING_HOD


def test_illegal_status_change_leaves_store_untouched():
    service, store = build_service()
    first = create_quarterly(service)[0]

    result = service.update_status("EMP-1", first.id, "Completed")

    assert not result.ok
    assert result.errors == {"status": "Invalid status transition from Draft to Completed"}
    assert store.get("EMP-1", first.id) == first


def test_update_evaluation_refreshes_reviewer_name():
    service, store = build_service()
    first = create_quarterly(service)[0]

    result = service.update_evaluation("EMP-1", first.id, {"reviewer_id": "2", "score": 7.5})

    assert result.ok
    stored = store.get("EMP-1", first.id)
    assert stored.reviewer == "Emily Rodriguez"
    assert stored.score == 7.5


def test_items_and_scores_round_trip_through_store():
    service, store = build_service()
    first = create_quarterly(service)[0]

    added = service.add_objective(
        "EMP-1",
        first.id,
        {"title": "Delivery", "description": "Ship Q1 scope", "target": 8, "achieved": 7, "weight": 100},
    )
    assert added.ok
    assert service.add_competency(
        "EMP-1",
        first.id,
        {
            "name": "Communication",
            "description": "Clear status updates",
            "category": "Core",
            "required_level": 8,
            "actual_level": 8,
            "weight": 50,
        },
    ).ok

    objectives, competencies = store.items(first.id)
    assert [item.title for item in objectives] == ["Delivery"]
    assert [item.name for item in competencies] == ["Communication"]

    scores = service.scores("EMP-1", first.id)
    assert scores.ok
    assert scores.value == {"objectives": 8.8, "competencies": 10.0, "score": None}


def test_invalid_objective_is_rejected():
    service, store = build_service()
    first = create_quarterly(service)[0]

    result = service.add_objective("EMP-1", first.id, {"title": "x", "description": "y", "target": 5, "achieved": 5, "weight": 0})

    assert not result.ok
    assert result.errors == {"weight": "Weight must be between 1-100%"}
    assert store.items(first.id) == ([], [])


def test_delete_cascades_to_items():
    service, store = build_service()
    first = create_quarterly(service)[0]
    service.add_objective(
        "EMP-1",
        first.id,
        {"title": "Delivery", "description": "Ship", "target": 8, "achieved": 7, "weight": 40},
    )

    result = service.delete_evaluation("EMP-1", first.id)

    assert result.ok
    assert store.get("EMP-1", first.id) is None
    assert store.items(first.id) == ([], [])
    assert len(store.list("EMP-1")) == 3


def test_unknown_evaluation_reports_not_found():
    service, _ = build_service()

    for result in (
        service.update_status("EMP-1", "missing", "Rejected"),
        service.delete_evaluation("EMP-1", "missing"),
        service.scores("EMP-1", "missing"),
    ):
        assert not result.ok
        assert result.errors == {"evaluation_id": "Evaluation not found"}
