"""Flatten a jurisdiction's requirement groups into a field coverage model."""

from __future__ import annotations

from typing import Dict, List, Sequence

import structlog

from .models import ExtractedRequirements, GroupLogic, RequirementGroup, RequirementRuleSet

logger = structlog.get_logger(__name__)


def extract_requirements(rule_set: RequirementRuleSet | Sequence[RequirementGroup]) -> ExtractedRequirements:
    """Split requirement groups into mandatory fields and OR groups.

    AND fields are collected once each in order of first appearance. Each OR
    group gets the next ``group_<n>`` id; AND groups do not consume an id and
    OR fields are never mandatory.
    """

    groups = rule_set.requirements if isinstance(rule_set, RequirementRuleSet) else rule_set

    mandatory: Dict[str, None] = {}
    or_groups: Dict[str, List[str]] = {}
    counter = 0

    for group in groups:
        if group.logic == GroupLogic.AND:
            for key in group.fields:
                mandatory.setdefault(key, None)
        elif group.logic == GroupLogic.OR:
            or_groups[f"group_{counter}"] = list(group.fields)
            counter += 1

    logger.debug("requirements_extracted", mandatory=len(mandatory), or_groups=len(or_groups))
    return ExtractedRequirements(mandatory_fields=list(mandatory), or_groups=or_groups)


__all__ = ["extract_requirements"]
