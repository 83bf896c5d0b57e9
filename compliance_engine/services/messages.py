"""Subject / body templates for compliance notifications (plain text)."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from compliance_engine.services.planner import DocumentRef
    from compliance_engine.services.sla import StaleVendor


def expiring_reminder(document: "DocumentRef") -> tuple[str, str]:
    subject = f"Urgent: Document Renewal Required for {document.doc_type}"
    name = document.file_name or document.doc_type
    body = (
        f"Your document {name} ({document.doc_type}) is expiring on "
        f"{document.expiry_day}. Please renew immediately."
    )
    return subject, body


def status_changed(new_status: str, reason: str) -> tuple[str, str]:
    subject = f"Action Required: Vendor Status Updated to {new_status}"
    body = f"{reason} You are temporarily blocked from RFQs until renewed."
    return subject, body


def sla_digest(
    reviewer_name: str, stale: Sequence["StaleVendor"], sla_hours: int
) -> tuple[str, str]:
    subject = f"URGENT: {len(stale)} Vendor Submissions Exceeded {sla_hours}h SLA"
    lines = "\n".join(
        f"Vendor ID: {v.display_code}, Name: {v.company_name}, "
        f"Submitted: {v.submitted_at.date().isoformat()}"
        for v in stale
    )
    body = (
        f"Dear {reviewer_name},\n\n"
        f"The following vendor submissions have been in 'Under Review' status for over "
        f"{sla_hours} hours and require immediate attention:\n\n"
        f"{lines}\n\n"
        "Please review and action these submissions promptly."
    )
    return subject, body
