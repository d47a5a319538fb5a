"""Semantic equivalence table used by the last matching pass."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Sequence

import yaml

from .config import Settings, load_settings
from .errors import ConfigurationSchemaError


class EquivalenceTable:
    """Many-to-many aliasing of field keys built from ordered classes.

    The aliases of a key are the other members of every class it belongs to,
    in declared order.
    """

    def __init__(self, classes: Iterable[Sequence[str]]):
        self._aliases: Dict[str, List[str]] = {}
        for members in classes:
            for key in members:
                known = self._aliases.setdefault(key, [])
                for other in members:
                    if other != key and other not in known:
                        known.append(other)

    def aliases_for(self, key: str) -> List[str]:
        return list(self._aliases.get(key, []))

    def are_equivalent(self, left: str, right: str) -> bool:
        return right in self._aliases.get(left, [])


@lru_cache(maxsize=4)
def _load_equivalence_table(path: Path) -> EquivalenceTable:
    if not path.exists():
        return EquivalenceTable([])

    with path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or []

    if not isinstance(raw, list) or not all(isinstance(item, list) for item in raw):
        raise ConfigurationSchemaError(f"equivalence classes at {path} must be a list of lists")

    return EquivalenceTable(raw)


def load_equivalence_table(settings: Settings | None = None) -> EquivalenceTable:
    settings = settings or load_settings()
    return _load_equivalence_table(settings.paths.equivalences_file)


__all__ = ["EquivalenceTable", "load_equivalence_table"]
