"""Per-vendor decision planning."""

from datetime import datetime, timezone

import pytest

from compliance_engine.services.expiry import ExpiryState
from compliance_engine.services.planner import (
    DocumentEvaluation,
    DocumentRef,
    NoAction,
    NotifyExpiring,
    SetNeedsRenewal,
    plan_vendor,
    renewal_reason,
)


def _eval(doc_type: str, day: int, state: ExpiryState, doc_id: str = None) -> DocumentEvaluation:
    return DocumentEvaluation(
        document=DocumentRef(
            document_id=doc_id or f"{doc_type}-{day}",
            doc_type=doc_type,
            expiry_date=datetime(2026, 10, day, tzinfo=timezone.utc),
        ),
        state=state,
    )


class TestPlanVendor:
    def test_no_documents_is_no_action(self):
        assert plan_vendor("ACTIVE", []) == NoAction()

    def test_all_ok_is_no_action(self):
        assert plan_vendor("ACTIVE", [_eval("ISO_CERTIFICATE", 30, ExpiryState.OK)]) == NoAction()

    def test_one_expired_among_ok_sets_needs_renewal_once(self):
        decision = plan_vendor(
            "ACTIVE",
            [
                _eval("ISO_CERTIFICATE", 28, ExpiryState.OK),
                _eval("COMMERCIAL_REGISTRATION", 16, ExpiryState.EXPIRED),
            ],
        )
        assert isinstance(decision, SetNeedsRenewal)
        assert decision.new_status == "NEEDS_RENEWAL"
        assert decision.document.doc_type == "COMMERCIAL_REGISTRATION"
        assert decision.reason == "Mandatory document COMMERCIAL_REGISTRATION expired on 2026-10-16."

    def test_first_expired_document_names_the_reason(self):
        decision = plan_vendor(
            "APPROVED",
            [
                _eval("ZAKAT_CERTIFICATE", 3, ExpiryState.EXPIRED),
                _eval("GOSI_CERTIFICATE", 1, ExpiryState.EXPIRED),
            ],
        )
        assert isinstance(decision, SetNeedsRenewal)
        assert "ZAKAT_CERTIFICATE" in decision.reason

    def test_expired_beats_expiring_soon(self):
        decision = plan_vendor(
            "ACTIVE",
            [
                _eval("ISO_CERTIFICATE", 20, ExpiryState.EXPIRING_SOON),
                _eval("GOSI_CERTIFICATE", 1, ExpiryState.EXPIRED),
            ],
        )
        assert isinstance(decision, SetNeedsRenewal)

    def test_expiring_soon_lists_every_matching_document(self):
        decision = plan_vendor(
            "ACTIVE",
            [
                _eval("ISO_CERTIFICATE", 20, ExpiryState.EXPIRING_SOON),
                _eval("GOSI_CERTIFICATE", 25, ExpiryState.OK),
                _eval("ZAKAT_CERTIFICATE", 27, ExpiryState.EXPIRING_SOON),
            ],
        )
        assert isinstance(decision, NotifyExpiring)
        assert [d.doc_type for d in decision.documents] == ["ISO_CERTIFICATE", "ZAKAT_CERTIFICATE"]

    def test_blocked_vendor_gets_no_expiring_reminder(self):
        decision = plan_vendor(
            "NEEDS_RENEWAL", [_eval("ISO_CERTIFICATE", 20, ExpiryState.EXPIRING_SOON)]
        )
        assert decision == NoAction()

    def test_blocked_vendor_is_not_transitioned_again(self):
        decision = plan_vendor(
            "NEEDS_RENEWAL", [_eval("COMMERCIAL_REGISTRATION", 1, ExpiryState.EXPIRED)]
        )
        assert decision == NoAction()

    @pytest.mark.parametrize("status", ["NEW", "UNDER_REVIEW", "APPROVED", "ACTIVE", "REJECTED"])
    def test_any_other_status_can_be_flagged(self, status):
        decision = plan_vendor(status, [_eval("INSURANCE_CERTIFICATE", 2, ExpiryState.EXPIRED)])
        assert isinstance(decision, SetNeedsRenewal)


def test_renewal_reason_uses_calendar_day():
    ref = DocumentRef("d1", "ISO_CERTIFICATE", datetime(2026, 3, 9, 23, 59, tzinfo=timezone.utc))
    assert renewal_reason(ref) == "Mandatory document ISO_CERTIFICATE expired on 2026-03-09."
