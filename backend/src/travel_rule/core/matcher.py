"""Four-pass reconciliation of two parties' field requirements."""

from __future__ import annotations

from typing import AbstractSet, Dict, List, Mapping, Optional, Sequence

import structlog

from .equivalence import EquivalenceTable
from .models import FieldAnalysis, FieldMatch, TransferDirection

logger = structlog.get_logger(__name__)

ALTERNATIVE_IDENTITY_FIELDS = frozenset({"id_document_number", "customer_id", "date_of_birth", "birthplace"})
COMBINATION_PAIR = ("date_of_birth", "birthplace")
COMBINATION_LABEL = "date_of_birth + birthplace"

ORIGIN_NAMESPACE = "origin"
COUNTERPARTY_NAMESPACE = "counterparty"


def is_alternative_identity_group(fields: Sequence[str]) -> bool:
    return len(fields) == len(ALTERNATIVE_IDENTITY_FIELDS) and set(fields) == ALTERNATIVE_IDENTITY_FIELDS


def _provider_of(group_id: str) -> str:
    # Counterparty groups are satisfied by origin fields and vice versa.
    namespace = group_id.split(":", 1)[0]
    return ORIGIN_NAMESPACE if namespace == COUNTERPARTY_NAMESPACE else COUNTERPARTY_NAMESPACE


class _Claims:
    """Call-scoped bookkeeping of claimed fields on both sides."""

    def __init__(self) -> None:
        # dicts keep claim order
        self.origin: Dict[str, None] = {}
        self.counterparty: Dict[str, None] = {}
        self.matches: List[FieldMatch] = []
        self.resolutions: Dict[str, str] = {}

    def claim(
        self,
        source: str,
        target: str,
        *,
        exact: bool,
        group_id: Optional[str] = None,
    ) -> None:
        self.matches.append(
            FieldMatch(
                source_field=source,
                target_field=target,
                exact=exact,
                via_alternative=group_id is not None,
                alternative_group_id=group_id,
            )
        )
        self.origin[source] = None
        self.counterparty[target] = None


class FieldMatcher:
    """Reconcile mandatory fields and OR groups of two parties.

    Side A is the origin VASP and side B the counterparty. Every pass is
    greedy: a field claimed by an earlier pass or earlier iteration cannot be
    matched again on the same side.
    """

    def __init__(self, equivalences: EquivalenceTable):
        self.equivalences = equivalences

    def match(
        self,
        mandatory_a: Sequence[str],
        mandatory_b: Sequence[str],
        or_groups_a: Mapping[str, Sequence[str]],
        or_groups_b: Mapping[str, Sequence[str]],
        direction: TransferDirection,
    ) -> FieldAnalysis:
        set_a = set(mandatory_a)
        set_b = set(mandatory_b)
        claims = _Claims()

        # Pass 1: exact mandatory match
        for key in mandatory_a:
            if key in set_b:
                claims.claim(key, key, exact=True)

        # Pass 2: counterparty OR groups against origin mandatory fields
        for group_id, fields in or_groups_b.items():
            namespaced = f"{COUNTERPARTY_NAMESPACE}:{group_id}"
            if namespaced in claims.resolutions:
                continue
            self._resolve_group(namespaced, fields, set_a, claims.origin, claims)

        # Pass 3: origin OR groups against counterparty mandatory fields
        for group_id, fields in or_groups_a.items():
            namespaced = f"{ORIGIN_NAMESPACE}:{group_id}"
            if namespaced in claims.resolutions:
                continue
            self._resolve_group(namespaced, fields, set_b, claims.counterparty, claims)

        # Pass 4: semantic equivalence
        for key in mandatory_a:
            if key in claims.origin:
                continue
            for alias in self.equivalences.aliases_for(key):
                if alias in set_b and alias not in claims.counterparty:
                    claims.claim(key, alias, exact=False)
                    break

        analysis = self._summarise(mandatory_a, mandatory_b, claims, direction)
        logger.debug(
            "fields_matched",
            direction=TransferDirection(direction).value,
            matches=len(claims.matches),
            resolved_groups=len(claims.resolutions),
            missing=len(analysis.missing_fields),
        )
        return analysis

    def _resolve_group(
        self,
        group_id: str,
        fields: Sequence[str],
        provided: AbstractSet[str],
        provider_claims: Mapping[str, None],
        claims: _Claims,
    ) -> None:
        identity_group = is_alternative_identity_group(fields)
        # While both pair members are free they resolve the group together.
        pair_available = identity_group and self._combination_available(provided, claims)

        for key in fields:
            if pair_available and key in COMBINATION_PAIR:
                continue
            if key in provided and key not in provider_claims:
                claims.claim(key, key, exact=True, group_id=group_id)
                claims.resolutions[group_id] = key
                return

        if pair_available:
            for key in COMBINATION_PAIR:
                claims.claim(key, key, exact=True, group_id=group_id)
            claims.resolutions[group_id] = COMBINATION_LABEL
            logger.debug(
                "combination_rule_applied",
                group_id=group_id,
                provider=_provider_of(group_id),
            )

    @staticmethod
    def _combination_available(provided: AbstractSet[str], claims: _Claims) -> bool:
        return all(
            key in provided and key not in claims.origin and key not in claims.counterparty
            for key in COMBINATION_PAIR
        )

    @staticmethod
    def _summarise(
        mandatory_a: Sequence[str],
        mandatory_b: Sequence[str],
        claims: _Claims,
        direction: TransferDirection,
    ) -> FieldAnalysis:
        unclaimed_a = [key for key in mandatory_a if key not in claims.origin]
        unclaimed_b = [key for key in mandatory_b if key not in claims.counterparty]

        if TransferDirection(direction) == TransferDirection.OUT:
            missing, extra = unclaimed_b, unclaimed_a
            source_sends_more, counterparty_sends_more = list(extra), []
        else:
            missing, extra = unclaimed_a, unclaimed_b
            source_sends_more, counterparty_sends_more = [], list(extra)

        return FieldAnalysis(
            missing_fields=missing,
            extra_fields=extra,
            matching_fields=list(claims.origin),
            source_sends_more=source_sends_more,
            counterparty_sends_more=counterparty_sends_more,
            matches=claims.matches,
            alternative_group_resolutions=claims.resolutions,
        )


__all__ = [
    "ALTERNATIVE_IDENTITY_FIELDS",
    "COMBINATION_LABEL",
    "FieldMatcher",
    "is_alternative_identity_group",
]
