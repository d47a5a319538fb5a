"""Configuration loading utilities for the travel rule calculator."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

PACKAGE_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = PACKAGE_ROOT / "config" / "app.yaml"
DEFAULT_DATA_DIR = PACKAGE_ROOT / "data"


class AppPaths(BaseModel):
    """Physical locations for jurisdiction tables and dictionaries."""

    data_dir: Path

    @property
    def jurisdictions_file(self) -> Path:
        return self.data_dir / "jurisdictions.yaml"

    @property
    def jurisdictions_schema_file(self) -> Path:
        return self.data_dir / "jurisdictions.schema.json"

    @property
    def field_dictionary_file(self) -> Path:
        return self.data_dir / "field_dictionary.yaml"

    @property
    def equivalences_file(self) -> Path:
        return self.data_dir / "equivalences.yaml"


class Settings(BaseModel):
    """Global application settings sourced from YAML + environment overrides."""

    log_level: str = Field(default="INFO", pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    validate_config: bool = True
    # Units of each currency per 1 USD.
    exchange_rates: Dict[str, float] = Field(default_factory=lambda: {"USD": 1.0})
    paths: AppPaths

    @property
    def data_dir(self) -> Path:
        return self.paths.data_dir


class SettingsError(RuntimeError):
    """Raised when configuration cannot be loaded."""


def _load_yaml_config() -> Dict[str, Any]:
    path = Path(os.getenv("APP_CONFIG", str(DEFAULT_CONFIG_PATH)))

    if not path.exists():
        raise SettingsError(f"APP_CONFIG path not found: {path}")

    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    # Relative data dirs resolve against the config file location.
    paths: Dict[str, Any] = data.get("paths", {}) or {}
    data_dir = Path(os.getenv("APP_DATA_DIR", paths.get("data_dir", str(DEFAULT_DATA_DIR))))
    if not data_dir.is_absolute():
        data_dir = (path.parent / data_dir).resolve()
    data["paths"] = {"data_dir": data_dir}

    if "LOG_LEVEL" in os.environ:
        data["log_level"] = os.environ["LOG_LEVEL"].upper()

    if "VALIDATE_CONFIG" in os.environ:
        data["validate_config"] = os.environ["VALIDATE_CONFIG"].lower() in {"1", "true", "yes"}

    return data


_CACHED_SETTINGS: Optional[Settings] = None


def load_settings(force_reload: bool = False) -> Settings:
    """Load application settings and cache the result."""

    global _CACHED_SETTINGS

    if _CACHED_SETTINGS is not None and not force_reload:
        return _CACHED_SETTINGS

    raw = _load_yaml_config()

    try:
        settings = Settings.model_validate(raw)
    except ValidationError as exc:
        raise SettingsError(f"Invalid configuration: {exc}") from exc

    if not settings.data_dir.is_dir():
        raise SettingsError(f"data directory not found: {settings.data_dir}")

    _CACHED_SETTINGS = settings
    return settings


__all__ = [
    "AppPaths",
    "Settings",
    "SettingsError",
    "load_settings",
]
