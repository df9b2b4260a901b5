"""Pydantic configuration schema for YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationError

from .evaluation import Reviewer


class GeneratorSettings(BaseModel):
    max_optional_quarter: int | None = Field(default=None, ge=1)


class AppConfig(BaseModel):
    reviewers: list[Reviewer] = Field(default_factory=list)
    generator: GeneratorSettings = Field(default_factory=GeneratorSettings)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {
            "reviewers": [reviewer.model_dump(mode="json") for reviewer in self.reviewers],
        }
        generator_settings = self.generator.model_dump(exclude_none=True)
        if generator_settings:
            settings["generator"] = generator_settings
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
