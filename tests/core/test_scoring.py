from __future__ import annotations

import pytest

from hreval.core import WeightedScore, competency_score, composite_score, item_score, objective_score
from hreval.core.scoring import round_score
from hreval.schemas import Competency, Objective


def build_objective(target: int, achieved: int, weight: int, **kwargs) -> Objective:
    defaults = {
        "id": "O-1",
        "title": "Increase Sales Revenue",
        "description": "Grow quarterly revenue.",
        "target": target,
        "achieved": achieved,
        "weight": weight,
    }
    defaults.update(kwargs)
    return Objective(**defaults)


def build_competency(required: int, actual: int, weight: int) -> Competency:
    return Competency(
        id="C-1",
        name="Communication Skills",
        description="Communicates clearly.",
        required_level=required,
        actual_level=actual,
        weight=weight,
    )


@pytest.mark.parametrize("target", range(1, 11))
@pytest.mark.parametrize("achieved", range(1, 11))
def test_item_score_matches_formula(target: int, achieved: int):
    assert item_score(achieved, target) == achieved / target * 10


def test_item_score_example():
    assert item_score(7, 8) == 8.75


def test_item_score_is_not_clamped_when_overachieving():
    # current behavior: overachievement scores above 10
    assert item_score(10, 5) == 20.0
    assert objective_score(build_objective(target=4, achieved=8, weight=10)) == 20.0


def test_item_score_rejects_non_positive_target():
    with pytest.raises(ValueError):
        item_score(5, 0)


def test_competency_score_uses_levels():
    assert competency_score(build_competency(required=8, actual=7, weight=25)) == 8.75


def test_composite_of_empty_collection_is_zero():
    assert composite_score([]) == 0.0


def test_composite_with_zero_total_weight_is_zero():
    assert composite_score([WeightedScore(score=8, weight=0), WeightedScore(score=4, weight=0)]) == 0.0


def test_composite_even_split():
    items = [WeightedScore(score=10, weight=50), WeightedScore(score=0, weight=50)]
    assert composite_score(items) == 5.0


def test_composite_weighted_objectives():
    objectives = [
        build_objective(target=8, achieved=7, weight=40),
        build_objective(target=9, achieved=8, weight=35, id="O-2"),
    ]

    expected = ((7 / 8 * 10) * 40 + (8 / 9 * 10) * 35) / 75
    assert expected == pytest.approx(8.8148, abs=1e-4)
    assert composite_score(objectives) == 8.8


def test_composite_weighted_competencies():
    competencies = [
        build_competency(required=8, actual=7, weight=25),
        build_competency(required=7, actual=8, weight=30),
    ]
    # (8.75 * 25 + 11.428... * 30) / 55
    assert composite_score(competencies) == 10.2


def test_weights_need_not_sum_to_hundred():
    items = [WeightedScore(score=6, weight=1), WeightedScore(score=9, weight=2)]
    assert composite_score(items) == 8.0


def test_round_score_rounds_half_up():
    assert round_score(8.75) == 8.8
    assert round_score(0.25) == 0.3
    assert round_score(7.04) == 7.0
