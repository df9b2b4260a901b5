"""Item and composite score computation."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Protocol, runtime_checkable

from ..schemas import Competency, Objective

SCORE_SCALE = 10
_ONE_DECIMAL = Decimal("0.1")


@runtime_checkable
class ScoredItem(Protocol):
    """Anything carrying a normalized score and a weight."""

    score: float
    weight: float


@dataclass(slots=True, frozen=True)
class WeightedScore:
    score: float
    weight: float


def item_score(achieved: float, target: float) -> float:
    """Score ``achieved`` against ``target`` on a 0-10 scale.

    Overachievement is not clamped, so the result may exceed 10.
    """
    if target <= 0:
        raise ValueError(f"target must be positive, got {target!r}")
    return achieved / target * SCORE_SCALE


def objective_score(objective: Objective) -> float:
    return item_score(objective.achieved, objective.target)


def competency_score(competency: Competency) -> float:
    return item_score(competency.actual_level, competency.required_level)


def weighted(item: Objective | Competency | ScoredItem) -> WeightedScore:
    if isinstance(item, Objective):
        return WeightedScore(objective_score(item), item.weight)
    if isinstance(item, Competency):
        return WeightedScore(competency_score(item), item.weight)
    return WeightedScore(float(item.score), float(item.weight))


def composite_score(items: Iterable[Objective | Competency | ScoredItem]) -> float:
    """Weight-normalized average of item scores, rounded to one decimal."""
    scored = [weighted(item) for item in items]
    if not scored:
        return 0.0
    total_weight = sum(entry.weight for entry in scored)
    if total_weight == 0:
        return 0.0
    total = sum(entry.score * entry.weight for entry in scored)
    return round_score(total / total_weight)


def round_score(value: float) -> float:
    """Round half away from zero on the exact binary value, like ``toFixed(1)``."""
    return float(Decimal(value).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))
