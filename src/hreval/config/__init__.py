"""Configuration management utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..schemas.config import AppConfig, load_config


class ConfigManager:
    """YAML-backed configuration loader."""

    def __init__(self, base_path: str | Path):
        self._base_path = Path(base_path)

    def load(self, name: str) -> dict[str, Any]:
        """Load a YAML configuration by name without file extension."""
        return self.read(self._base_path / f"{name}.yaml")

    def load_app_config(self, name: str) -> AppConfig:
        return load_config(self.load(name))

    @staticmethod
    def read(path: str | Path) -> dict[str, Any]:
        """Read a YAML file; an empty document yields an empty mapping."""
        with Path(path).open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle)
        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file must be a YAML mapping: {path}")
        return loaded


__all__ = ["ConfigManager"]
