"""Human readable summaries of a compliance status."""

from __future__ import annotations

from .models import ComplianceStatus, FieldAnalysis, TransferDirection

STATUS_MESSAGES = {
    ComplianceStatus.FULL_MATCH: "Full Compliance - both parties require identical data sets",
    ComplianceStatus.OVERCOMPLIANCE: "Overcompliance - you provide more data than required",
    ComplianceStatus.COUNTERPARTY_MAY_REQUEST_MORE: (
        "Counterparty may request additional data beyond your jurisdiction requirements"
    ),
    ComplianceStatus.SENDER_MAY_NOT_PROVIDE: (
        "Sending party may not provide all required data for your jurisdiction"
    ),
}


def status_message(status: ComplianceStatus) -> str:
    return STATUS_MESSAGES.get(ComplianceStatus(status), "Unknown compliance status")


def detailed_message(status: ComplianceStatus, analysis: FieldAnalysis, direction: TransferDirection) -> str:
    status = ComplianceStatus(status)

    if status == ComplianceStatus.FULL_MATCH:
        return f"Requirements fully match. Both parties work with {len(analysis.matches)} matching field pairs."

    if status == ComplianceStatus.OVERCOMPLIANCE:
        if TransferDirection(direction) == TransferDirection.OUT:
            return (
                f"Origin VASP sends {len(analysis.source_sends_more)} additional fields beyond counterparty "
                "requirements. This is acceptable and does not violate compliance."
            )
        return (
            f"Counterparty sends {len(analysis.counterparty_sends_more)} additional fields beyond your "
            "requirements. This is acceptable."
        )

    if status == ComplianceStatus.COUNTERPARTY_MAY_REQUEST_MORE:
        return (
            f"Counterparty requires {len(analysis.missing_fields)} additional fields that are not mandatory "
            "in your jurisdiction. Counterparty may request this data."
        )

    return (
        f"Sending party may not provide {len(analysis.missing_fields)} fields required for compliance "
        "with your jurisdiction requirements."
    )


__all__ = ["STATUS_MESSAGES", "detailed_message", "status_message"]
