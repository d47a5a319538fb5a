"""Jurisdiction table and field dictionary loaders."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Mapping

import structlog
import yaml
from jsonschema import Draft202012Validator
from pydantic import ValidationError

from .config import Settings, load_settings
from .errors import ConfigurationLookupError, ConfigurationSchemaError
from .models import JurisdictionConfig

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FieldDefinition:
    key: str
    label: str
    aliases: List[str] = field(default_factory=list)
    optional: bool = False


class FieldDictionary:
    """Read-only lookup of field labels and aliases."""

    def __init__(self, definitions: Mapping[str, FieldDefinition]):
        self._definitions: Dict[str, FieldDefinition] = dict(definitions)

    def __contains__(self, key: str) -> bool:
        return key in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def label(self, key: str) -> str:
        definition = self._definitions.get(key)
        return definition.label if definition else key

    def aliases(self, key: str) -> List[str]:
        definition = self._definitions.get(key)
        return list(definition.aliases) if definition else []

    def is_optional(self, key: str) -> bool:
        definition = self._definitions.get(key)
        return definition.optional if definition else False

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {
            key: {"label": d.label, "aliases": list(d.aliases), "optional": d.optional}
            for key, d in self._definitions.items()
        }


class JurisdictionRegistry:
    """Immutable per-country table of travel rule configurations."""

    def __init__(self, jurisdictions: Mapping[str, JurisdictionConfig]):
        self._jurisdictions: Dict[str, JurisdictionConfig] = dict(jurisdictions)

    def __contains__(self, code: str) -> bool:
        return code in self._jurisdictions

    def get(self, code: str, *, side: str | None = None) -> JurisdictionConfig:
        if code not in self._jurisdictions:
            raise ConfigurationLookupError(code, side)
        return self._jurisdictions[code]

    def codes(self) -> List[str]:
        return list(self._jurisdictions.keys())

    def countries(self) -> List[JurisdictionConfig]:
        return list(self._jurisdictions.values())


def _read_yaml(path: Path) -> Any:
    if not path.exists():
        raise ConfigurationSchemaError(f"configuration file missing at {path}")

    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def _validate_table(raw: Dict[str, Any], schema_path: Path) -> None:
    with schema_path.open("r", encoding="utf-8") as handle:
        schema = json.load(handle)

    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(raw), key=lambda err: list(err.path))
    if errors:
        formatted = [
            {
                "path": list(error.path),
                "message": error.message,
                "validator": error.validator,
            }
            for error in errors
        ]
        raise ConfigurationSchemaError("jurisdiction table failed validation", errors=formatted)


def build_jurisdiction_registry(raw: Mapping[str, Any]) -> JurisdictionRegistry:
    jurisdictions: Dict[str, JurisdictionConfig] = {}
    for code, data in raw.items():
        payload = dict(data)
        payload.setdefault("name", code)
        try:
            jurisdictions[code] = JurisdictionConfig.model_validate({"code": code, **payload})
        except ValidationError as exc:
            raise ConfigurationSchemaError(f"invalid jurisdiction {code}: {exc}") from exc
    return JurisdictionRegistry(jurisdictions)


@lru_cache(maxsize=4)
def _load_jurisdiction_table(path: Path, schema_path: Path, validate: bool) -> JurisdictionRegistry:
    raw = _read_yaml(path) or {}
    if validate:
        _validate_table(raw, schema_path)

    registry = build_jurisdiction_registry(raw)
    logger.debug("jurisdictions_loaded", path=str(path), codes=registry.codes())
    return registry


def load_jurisdiction_table(settings: Settings | None = None) -> JurisdictionRegistry:
    settings = settings or load_settings()
    return _load_jurisdiction_table(
        settings.paths.jurisdictions_file,
        settings.paths.jurisdictions_schema_file,
        settings.validate_config,
    )


@lru_cache(maxsize=4)
def _load_field_dictionary(path: Path) -> FieldDictionary:
    if not path.exists():
        return FieldDictionary({})

    raw: Dict[str, Any] = _read_yaml(path) or {}

    definitions: Dict[str, FieldDefinition] = {}
    for key, value in raw.items():
        value = value or {}
        aliases = value.get("aliases") or []
        if isinstance(aliases, str):
            aliases = [aliases]
        definitions[key] = FieldDefinition(
            key=key,
            label=str(value.get("label", key)),
            aliases=list(aliases),
            optional=bool(value.get("optional", False)),
        )
    return FieldDictionary(definitions)


def load_field_dictionary(settings: Settings | None = None) -> FieldDictionary:
    settings = settings or load_settings()
    return _load_field_dictionary(settings.paths.field_dictionary_file)


__all__ = [
    "FieldDefinition",
    "FieldDictionary",
    "JurisdictionRegistry",
    "build_jurisdiction_registry",
    "load_field_dictionary",
    "load_jurisdiction_table",
]
