"""Field-level validation helpers shared by the generator and the aggregate."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

import pendulum
from pendulum.parsing.exceptions import ParserError
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

DraftT = TypeVar("DraftT", bound=BaseModel)

PAYLOAD_FIELD = "payload"


def parse_draft(
    model: type[DraftT],
    payload: Any,
    messages: Mapping[str, str],
) -> tuple[DraftT, dict[str, str]]:
    """Coerce ``payload`` into ``model`` and report unparseable fields.

    Fields that fail to parse are dropped from the draft (so they read as
    unset) and reported with the message registered for that field, which
    lets callers run their own rule checks on the remaining fields and
    surface every problem at once.
    """
    if isinstance(payload, model):
        return payload, {}
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(exclude_unset=True)
    if not isinstance(payload, Mapping):
        raise ValidationError({PAYLOAD_FIELD: "Expected a mapping of form fields"})

    data = dict(payload)
    try:
        return model.model_validate(data), {}
    except PydanticValidationError as exc:
        errors: dict[str, str] = {}
        for detail in exc.errors():
            field = str(detail["loc"][0]) if detail["loc"] else PAYLOAD_FIELD
            errors.setdefault(field, messages.get(field, detail["msg"]))
    remaining = {key: value for key, value in data.items() if key not in errors}
    return model.model_validate(remaining), errors


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def in_range(value: int | float | None, low: int | float, high: int | float) -> bool:
    # zero reads as "not entered" on the forms, so it never passes
    if value is None or not value:
        return False
    return low <= value <= high


def normalize_date(value: str) -> str | None:
    """Return ``value`` as ``YYYY-MM-DD`` or ``None`` when it cannot be parsed."""
    try:
        parsed = pendulum.parse(value)
    except (ValueError, ParserError):
        return None
    if not isinstance(parsed, pendulum.Date):
        return None
    return parsed.to_date_string()
