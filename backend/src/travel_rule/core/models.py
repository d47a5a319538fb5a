"""
Data models for the travel rule calculator using Pydantic v2.

Defines jurisdiction rule sets, transaction inputs, and the field analysis
and compliance result returned for every evaluation.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CustomerCategory(str, Enum):
    """Kind of customer originating the transfer."""

    INDIVIDUAL = "individual"
    COMPANY = "company"


class TransferDirection(str, Enum):
    """Direction of the transfer seen from the origin VASP."""

    OUT = "OUT"
    IN = "IN"


class GroupLogic(str, Enum):
    AND = "AND"
    OR = "OR"


class ComplianceStatus(str, Enum):
    """Single compliance outcome derived from the two mandatory field sets."""

    FULL_MATCH = "full_match"
    OVERCOMPLIANCE = "overcompliance"
    COUNTERPARTY_MAY_REQUEST_MORE = "counterparty_may_request_more"
    SENDER_MAY_NOT_PROVIDE = "sender_may_not_provide"


class TransactionDescription(BaseModel):
    """Immutable description of the transfer being evaluated."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    origin_country: str = Field(..., min_length=1, description="Country code of the origin VASP")
    counterparty_country: str = Field(..., min_length=1, description="Country code of the counterparty VASP")
    customer_category: CustomerCategory
    direction: TransferDirection
    amount: float = Field(..., description="Transfer amount in the origin jurisdiction's currency")


class RequirementGroup(BaseModel):
    fields: List[str] = Field(..., min_length=1)
    logic: GroupLogic

    @field_validator("fields")
    @classmethod
    def fields_unique(cls, value: List[str]) -> List[str]:
        if len(set(value)) != len(value):
            raise ValueError("field keys within a requirement group must be unique")
        return value


class RequirementRuleSet(BaseModel):
    """Requirement groups plus flags for one customer category and tier."""

    requirements: List[RequirementGroup] = Field(default_factory=list)
    recommended_fields: List[str] = Field(default_factory=list)
    kyc_required: bool = False
    aml_required: bool = False
    wallet_attribution: bool = False


class CategoryRules(BaseModel):
    below_threshold: RequirementRuleSet
    above_threshold: RequirementRuleSet


class JurisdictionConfig(BaseModel):
    """Travel rule configuration for a single country code."""

    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    currency: str
    threshold: float = Field(..., ge=0, description="Inclusive threshold in local currency")
    individual: CategoryRules
    company: CategoryRules

    def threshold_met(self, amount: float) -> bool:
        return amount >= self.threshold

    def rules_for(self, category: CustomerCategory, amount: float) -> RequirementRuleSet:
        rules: CategoryRules = getattr(self, CustomerCategory(category).value)
        return rules.above_threshold if self.threshold_met(amount) else rules.below_threshold


class ExtractedRequirements(BaseModel):
    """Flat field coverage model for one side of the transfer."""

    mandatory_fields: List[str] = Field(default_factory=list)
    or_groups: Dict[str, List[str]] = Field(default_factory=dict)


class FieldMatch(BaseModel):
    source_field: str
    target_field: str
    exact: bool
    via_alternative: bool = False
    alternative_group_id: Optional[str] = None


class FieldAnalysis(BaseModel):
    missing_fields: List[str] = Field(default_factory=list)
    extra_fields: List[str] = Field(default_factory=list)
    matching_fields: List[str] = Field(default_factory=list)
    source_sends_more: List[str] = Field(default_factory=list)
    counterparty_sends_more: List[str] = Field(default_factory=list)
    matches: List[FieldMatch] = Field(default_factory=list)
    alternative_group_resolutions: Dict[str, str] = Field(default_factory=dict)


class RequirementSummary(BaseModel):
    required_fields: List[str]
    recommended_fields: List[str]
    requirement_groups: List[RequirementGroup]
    kyc_required: bool
    aml_required: bool
    wallet_attribution: bool


class ComplianceResult(BaseModel):
    """Outcome of one evaluation.

    ``status`` is derived from the two AND-only mandatory field sets. OR-group
    resolutions are reported in ``field_analysis`` and never change it.
    """

    origin_requirements: RequirementSummary
    counterparty_requirements: RequirementSummary
    status: ComplianceStatus
    currency: str
    threshold_met: bool
    converted_amount: Optional[float] = None
    field_analysis: FieldAnalysis


__all__ = [
    "CategoryRules",
    "ComplianceResult",
    "ComplianceStatus",
    "CustomerCategory",
    "ExtractedRequirements",
    "FieldAnalysis",
    "FieldMatch",
    "GroupLogic",
    "JurisdictionConfig",
    "RequirementGroup",
    "RequirementRuleSet",
    "RequirementSummary",
    "TransactionDescription",
    "TransferDirection",
]
