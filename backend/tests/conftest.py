"""Pytest configuration and shared fixtures for travel rule tests."""

import shutil
from pathlib import Path

import pytest

from travel_rule.core import config as config_module
from travel_rule.core.config import DEFAULT_DATA_DIR, AppPaths, Settings
from travel_rule.core.equivalence import load_equivalence_table
from travel_rule.core.matcher import FieldMatcher
from travel_rule.core.models import TransactionDescription


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Drop cached settings so tests that reload config don't leak."""
    yield
    config_module._CACHED_SETTINGS = None


@pytest.fixture
def settings():
    """Settings pointing at the packaged data tables."""
    return Settings(
        paths=AppPaths(data_dir=DEFAULT_DATA_DIR),
        exchange_rates={"USD": 1.0, "EUR": 0.85, "ZAR": 18.5},
    )


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Empty data directory carrying only the jurisdiction schema."""
    target = tmp_path / "data"
    target.mkdir()
    shutil.copy(DEFAULT_DATA_DIR / "jurisdictions.schema.json", target / "jurisdictions.schema.json")
    return target


@pytest.fixture
def matcher(settings):
    return FieldMatcher(load_equivalence_table(settings))


@pytest.fixture
def make_transaction():
    """Factory for transaction descriptions with sensible defaults."""

    def _make(origin="DEU", counterparty="DEU", category="individual", direction="OUT", amount=100):
        return TransactionDescription(
            origin_country=origin,
            counterparty_country=counterparty,
            customer_category=category,
            direction=direction,
            amount=amount,
        )

    return _make
