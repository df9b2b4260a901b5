"""Reviewer lookup built from configuration."""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from ..schemas import Reviewer


class ReviewerDirectory:
    """Resolve reviewer ids to reviewers.

    The roster is supplied by the caller; the directory never checks a
    reviewer's role against the evaluation stage.
    """

    def __init__(self, reviewers: Iterable[Reviewer | dict[str, Any]] | None = None) -> None:
        self._reviewers: dict[str, Reviewer] = {}
        for entry in reviewers or ():
            reviewer = Reviewer.model_validate(entry)
            self._reviewers[reviewer.id] = reviewer

    def resolve(self, reviewer_id: str | int | None) -> Reviewer | None:
        if reviewer_id is None:
            return None
        return self._reviewers.get(str(reviewer_id))

    def name_for(self, reviewer_id: str | int | None) -> str:
        reviewer = self.resolve(reviewer_id)
        return reviewer.name if reviewer else ""

    def __contains__(self, reviewer_id: object) -> bool:
        return str(reviewer_id) in self._reviewers

    def __iter__(self) -> Iterator[Reviewer]:
        return iter(self._reviewers.values())

    def __len__(self) -> int:
        return len(self._reviewers)
