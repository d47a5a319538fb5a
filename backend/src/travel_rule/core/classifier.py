"""Compliance status derived from the two mandatory field sets."""

from __future__ import annotations

from typing import Sequence

from .models import ComplianceStatus, TransferDirection


def classify_status(
    mandatory_a: Sequence[str],
    mandatory_b: Sequence[str],
    direction: TransferDirection,
) -> ComplianceStatus:
    """Classify the transfer from AND-only requirements.

    OR-group resolutions and semantic matches are not consulted:
    a gap covered only by an alternative group still counts as a gap here.
    """

    set_a = set(mandatory_a)
    set_b = set(mandatory_b)
    a_covers_b = set_b <= set_a
    b_covers_a = set_a <= set_b

    if a_covers_b and b_covers_a and len(set_a) == len(set_b):
        return ComplianceStatus.FULL_MATCH

    if TransferDirection(direction) == TransferDirection.OUT:
        if a_covers_b:
            return ComplianceStatus.OVERCOMPLIANCE if len(set_a) > len(set_b) else ComplianceStatus.FULL_MATCH
        return ComplianceStatus.COUNTERPARTY_MAY_REQUEST_MORE

    if b_covers_a:
        return ComplianceStatus.OVERCOMPLIANCE if len(set_b) > len(set_a) else ComplianceStatus.FULL_MATCH
    return ComplianceStatus.SENDER_MAY_NOT_PROVIDE


__all__ = ["classify_status"]
