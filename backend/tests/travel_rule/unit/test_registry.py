"""Unit tests for jurisdiction, field dictionary and equivalence loaders."""

import pytest

from travel_rule.core.config import AppPaths, Settings
from travel_rule.core.equivalence import EquivalenceTable, load_equivalence_table
from travel_rule.core.errors import ConfigurationLookupError, ConfigurationSchemaError
from travel_rule.core.models import CustomerCategory
from travel_rule.core.registry import (
    build_jurisdiction_registry,
    load_field_dictionary,
    load_jurisdiction_table,
)

RULE_SET = """
      requirements:
        - {fields: [full_name, wallet_address], logic: %s}
"""


def _write_table(data_dir, logic="AND"):
    rule_set = RULE_SET % logic
    body = (
        "XYZ:\n"
        "  currency: USD\n"
        "  threshold: 3000\n"
        "  individual:\n"
        f"    below_threshold:{rule_set}"
        f"    above_threshold:{rule_set}"
        "  company:\n"
        f"    below_threshold:{rule_set}"
        f"    above_threshold:{rule_set}"
    )
    (data_dir / "jurisdictions.yaml").write_text(body, encoding="utf-8")


def _settings(data_dir, validate=True):
    return Settings(paths=AppPaths(data_dir=data_dir), validate_config=validate)


class TestJurisdictionRegistry:
    """Tests for the packaged and custom jurisdiction tables."""

    def test_packaged_codes(self, settings):
        registry = load_jurisdiction_table(settings)
        assert registry.codes() == ["EU", "ZAF", "DEU"]
        assert "DEU" in registry

    def test_packaged_thresholds(self, settings):
        registry = load_jurisdiction_table(settings)
        assert registry.get("DEU").threshold == 0
        assert registry.get("ZAF").currency == "ZAR"
        assert registry.get("EU").name == "European Union"

    def test_unknown_code(self, settings):
        registry = load_jurisdiction_table(settings)
        with pytest.raises(ConfigurationLookupError) as exc_info:
            registry.get("FRA", side="counterparty")
        assert "FRA" in str(exc_info.value)
        assert exc_info.value.side == "counterparty"

    def test_custom_table(self, data_dir):
        _write_table(data_dir)
        registry = load_jurisdiction_table(_settings(data_dir))

        config = registry.get("XYZ")
        assert config.name == "XYZ"
        assert config.rules_for(CustomerCategory.COMPANY, 3000).requirements[0].fields == [
            "full_name",
            "wallet_address",
        ]

    def test_schema_violation(self, data_dir):
        _write_table(data_dir, logic="XOR")

        with pytest.raises(ConfigurationSchemaError) as exc_info:
            load_jurisdiction_table(_settings(data_dir))

        assert exc_info.value.errors
        assert exc_info.value.errors[0]["validator"] == "enum"

    def test_model_validation_without_schema(self, data_dir):
        _write_table(data_dir, logic="XOR")

        with pytest.raises(ConfigurationSchemaError):
            load_jurisdiction_table(_settings(data_dir, validate=False))

    def test_missing_table(self, data_dir):
        with pytest.raises(ConfigurationSchemaError):
            load_jurisdiction_table(_settings(data_dir))

    def test_duplicate_keys_in_group_rejected(self):
        group = {"fields": ["full_name", "full_name"], "logic": "AND"}
        rule_set = {"requirements": [group]}
        category = {"below_threshold": rule_set, "above_threshold": rule_set}
        raw = {"XYZ": {"currency": "USD", "threshold": 0, "individual": category, "company": category}}

        with pytest.raises(ConfigurationSchemaError):
            build_jurisdiction_registry(raw)


class TestFieldDictionary:
    """Tests for field label and alias lookups."""

    def test_labels_and_aliases(self, settings):
        fields = load_field_dictionary(settings)

        assert fields.label("birthplace") == "Place of Birth"
        assert "dob" in fields.aliases("date_of_birth")
        assert fields.is_optional("full_name") is False

    def test_unknown_key_falls_back(self, settings):
        fields = load_field_dictionary(settings)

        assert fields.label("tax_id") == "tax_id"
        assert fields.aliases("tax_id") == []
        assert "tax_id" not in fields

    def test_missing_file_gives_empty_dictionary(self, data_dir):
        assert len(load_field_dictionary(_settings(data_dir))) == 0

    def test_optional_flag(self, data_dir):
        (data_dir / "field_dictionary.yaml").write_text(
            "tax_id:\n  label: Tax ID\n  aliases: tin\n  optional: true\n", encoding="utf-8"
        )
        fields = load_field_dictionary(_settings(data_dir))

        assert fields.is_optional("tax_id") is True
        assert fields.aliases("tax_id") == ["tin"]
        assert fields.to_dict()["tax_id"]["label"] == "Tax ID"


class TestEquivalenceTable:
    """Tests for the semantic equivalence table."""

    def test_aliases_follow_declared_order(self, settings):
        table = load_equivalence_table(settings)

        assert table.aliases_for("full_name") == ["company_name", "registered_name"]
        assert table.aliases_for("wallet_address") == [
            "crypto_address",
            "blockchain_address",
            "virtual_asset_address",
            "dlt_address",
        ]
        assert table.aliases_for("id_document_number") == [
            "company_registration_number",
            "registration_number",
            "lei_or_equivalent",
        ]

    def test_unknown_key_has_no_aliases(self):
        assert EquivalenceTable([["a", "b"]]).aliases_for("c") == []

    def test_key_in_several_classes(self):
        table = EquivalenceTable([["a", "b"], ["a", "c", "b"]])

        assert table.aliases_for("a") == ["b", "c"]
        assert table.are_equivalent("c", "b")
        assert not table.are_equivalent("a", "a")

    def test_malformed_file(self, data_dir):
        (data_dir / "equivalences.yaml").write_text("full_name: company_name\n", encoding="utf-8")

        with pytest.raises(ConfigurationSchemaError):
            load_equivalence_table(_settings(data_dir))
