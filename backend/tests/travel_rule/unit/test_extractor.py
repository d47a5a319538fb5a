from travel_rule.core.extractor import extract_requirements
from travel_rule.core.models import RequirementGroup, RequirementRuleSet


def _group(fields, logic):
    return RequirementGroup(fields=fields, logic=logic)


def test_mandatory_fields_keep_first_appearance_order():
    rule_set = RequirementRuleSet(
        requirements=[
            _group(["a", "b"], "AND"),
            _group(["c", "d"], "OR"),
            _group(["b", "e"], "AND"),
            _group(["f", "g"], "OR"),
        ]
    )

    extracted = extract_requirements(rule_set)

    assert extracted.mandatory_fields == ["a", "b", "e"]
    assert extracted.or_groups == {"group_0": ["c", "d"], "group_1": ["f", "g"]}


def test_or_fields_are_not_mandatory():
    extracted = extract_requirements(
        [
            _group(["full_name"], "AND"),
            _group(["customer_id", "id_document_number"], "OR"),
        ]
    )

    assert extracted.mandatory_fields == ["full_name"]
    assert "customer_id" not in extracted.mandatory_fields


def test_field_in_and_and_or_group():
    extracted = extract_requirements(
        [
            _group(["customer_id", "wallet_address"], "AND"),
            _group(["customer_id", "id_document_number"], "OR"),
        ]
    )

    assert extracted.mandatory_fields == ["customer_id", "wallet_address"]
    assert extracted.or_groups["group_0"] == ["customer_id", "id_document_number"]


def test_and_groups_do_not_consume_ids():
    extracted = extract_requirements(
        [
            _group(["x"], "AND"),
            _group(["y"], "AND"),
            _group(["p", "q"], "OR"),
        ]
    )

    assert list(extracted.or_groups) == ["group_0"]


def test_empty_rule_set():
    extracted = extract_requirements(RequirementRuleSet())

    assert extracted.mandatory_fields == []
    assert extracted.or_groups == {}
