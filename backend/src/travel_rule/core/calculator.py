"""Deterministic compliance calculator coordinating lookup, extraction and matching."""

from __future__ import annotations

import structlog

from .classifier import classify_status
from .config import Settings, load_settings
from .currency import convert_to_usd
from .equivalence import EquivalenceTable, load_equivalence_table
from .extractor import extract_requirements
from .matcher import FieldMatcher
from .metrics import EVALUATIONS
from .models import (
    ComplianceResult,
    ExtractedRequirements,
    RequirementRuleSet,
    RequirementSummary,
    TransactionDescription,
)
from .registry import JurisdictionRegistry, load_jurisdiction_table

logger = structlog.get_logger(__name__)


class ComplianceCalculator:
    """Evaluate one transfer at a time against the configured jurisdictions.

    Holds only read-only collaborators, so a single instance can serve
    concurrent callers.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        registry: JurisdictionRegistry | None = None,
        equivalences: EquivalenceTable | None = None,
    ):
        self.settings = settings or load_settings()
        self.registry = registry or load_jurisdiction_table(self.settings)
        self.equivalences = equivalences or load_equivalence_table(self.settings)
        self.matcher = FieldMatcher(self.equivalences)

    def calculate(self, transaction: TransactionDescription) -> ComplianceResult:
        origin = self.registry.get(transaction.origin_country, side="origin")
        counterparty = self.registry.get(transaction.counterparty_country, side="counterparty")

        amount = transaction.amount
        origin_rules = origin.rules_for(transaction.customer_category, amount)
        counterparty_rules = counterparty.rules_for(transaction.customer_category, amount)

        origin_reqs = extract_requirements(origin_rules)
        counterparty_reqs = extract_requirements(counterparty_rules)

        analysis = self.matcher.match(
            origin_reqs.mandatory_fields,
            counterparty_reqs.mandatory_fields,
            origin_reqs.or_groups,
            counterparty_reqs.or_groups,
            transaction.direction,
        )
        status = classify_status(
            origin_reqs.mandatory_fields,
            counterparty_reqs.mandatory_fields,
            transaction.direction,
        )

        result = ComplianceResult(
            origin_requirements=self._summarise(origin_rules, origin_reqs),
            counterparty_requirements=self._summarise(counterparty_rules, counterparty_reqs),
            status=status,
            currency=origin.currency,
            threshold_met=origin.threshold_met(amount),
            converted_amount=convert_to_usd(amount, origin.currency, self.settings.exchange_rates),
            field_analysis=analysis,
        )

        EVALUATIONS.labels(status=status.value).inc()
        logger.info(
            "compliance_evaluated",
            origin=origin.code,
            counterparty=counterparty.code,
            customer_category=transaction.customer_category.value,
            direction=transaction.direction.value,
            status=status.value,
            matches=len(analysis.matches),
            missing=len(analysis.missing_fields),
        )
        return result

    @staticmethod
    def _summarise(rules: RequirementRuleSet, extracted: ExtractedRequirements) -> RequirementSummary:
        return RequirementSummary(
            required_fields=list(extracted.mandatory_fields),
            recommended_fields=list(rules.recommended_fields),
            requirement_groups=[group.model_copy(deep=True) for group in rules.requirements],
            kyc_required=rules.kyc_required,
            aml_required=rules.aml_required,
            wallet_attribution=rules.wallet_attribution,
        )


def calculate_compliance(transaction: TransactionDescription) -> ComplianceResult:
    """Evaluate ``transaction`` against the packaged configuration."""

    return ComplianceCalculator().calculate(transaction)


__all__ = ["ComplianceCalculator", "calculate_compliance"]
