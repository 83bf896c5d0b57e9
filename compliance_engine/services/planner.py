"""Per-vendor transition planning.

Reduces every evaluated document of one vendor into a single decision:

  SetNeedsRenewal  — at least one mandatory document has expired
  NotifyExpiring   — nothing expired, some documents expire soon, vendor not blocked
  NoAction         — everything else
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Union

from compliance_engine.core.enums import VendorStatus
from compliance_engine.services.expiry import ExpiryState


@dataclass(frozen=True)
class DocumentRef:
    document_id: str
    doc_type: str
    expiry_date: datetime
    file_name: str | None = None

    @property
    def expiry_day(self) -> str:
        return self.expiry_date.date().isoformat()


@dataclass(frozen=True)
class DocumentEvaluation:
    document: DocumentRef
    state: ExpiryState


@dataclass(frozen=True)
class SetNeedsRenewal:
    reason: str
    document: DocumentRef
    new_status: str = VendorStatus.NEEDS_RENEWAL.value


@dataclass(frozen=True)
class NotifyExpiring:
    documents: tuple[DocumentRef, ...]


@dataclass(frozen=True)
class NoAction:
    pass


VendorDecision = Union[SetNeedsRenewal, NotifyExpiring, NoAction]


def renewal_reason(document: DocumentRef) -> str:
    return f"Mandatory document {document.doc_type} expired on {document.expiry_day}."


def plan_vendor(current_status: str, evaluations: Sequence[DocumentEvaluation]) -> VendorDecision:
    """Decide what to do with one vendor, given its evaluations in evaluation order."""
    blocked = current_status == VendorStatus.NEEDS_RENEWAL.value

    expired = [e.document for e in evaluations if e.state is ExpiryState.EXPIRED]
    if expired:
        if blocked:
            # Already flagged by an earlier run; repeating the transition would duplicate audit rows
            return NoAction()
        return SetNeedsRenewal(reason=renewal_reason(expired[0]), document=expired[0])

    expiring = tuple(e.document for e in evaluations if e.state is ExpiryState.EXPIRING_SOON)
    if expiring and not blocked:
        return NotifyExpiring(documents=expiring)

    return NoAction()
