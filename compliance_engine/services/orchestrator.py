"""Compliance run orchestrator — one full expiry + SLA pass.

Run phases, all against a single reference timestamp:
  1. Load every expiry-tracked mandatory document with its vendor
  2. Classify each document and plan one decision per vendor
  3. Send expiring-soon reminders (per document)
  4. Apply NEEDS_RENEWAL transitions (per vendor: persist -> audit -> notify)
  5. SLA breach escalation
Each vendor transition has its own failure boundary. Anything escaping the
phases is recorded as a CRON_JOB_ERROR audit entry and the run ends without
raising, so the scheduler keeps going.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import Callable, Iterable
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from compliance_engine.core.config import settings
from compliance_engine.core.exceptions import RunInProgressError
from compliance_engine.domain.mixins import utcnow
from compliance_engine.repositories.document import DocumentRepository
from compliance_engine.repositories.vendor import VendorRepository
from compliance_engine.services import messages
from compliance_engine.services.audit_recorder import (
    COMPLIANCE_RUN_COMPLETED,
    CRON_JOB_ERROR,
    ENTITY_SYSTEM,
    ENTITY_VENDOR,
    VENDOR_STATUS_AUTOMATED,
    AuditRecorder,
)
from compliance_engine.services.expiry import ExpiryState, as_utc, classify_expiry
from compliance_engine.services.notifier import Notifier, safe_send
from compliance_engine.services.planner import (
    DocumentEvaluation,
    DocumentRef,
    NotifyExpiring,
    SetNeedsRenewal,
    VendorDecision,
    plan_vendor,
)
from compliance_engine.services.sla import SlaBreachDetector

logger = logging.getLogger(__name__)

JOB_NAME = "ExpiryCheck"


@dataclass
class RunSummary:
    run_id: str
    started_at: datetime
    finished_at: datetime | None = None
    outcome: str = "running"  # running | completed | failed
    documents_checked: int = 0
    expired_documents: int = 0
    expiring_soon_documents: int = 0
    reminders_sent: int = 0
    reminders_failed: int = 0
    vendors_flagged: int = 0
    vendors_skipped: int = 0
    failed_vendor_ids: list[str] = field(default_factory=list)
    status_notifications_failed: int = 0
    sla_breaches: int = 0
    escalation_sent: bool = False
    error: str | None = None

    def as_payload(self) -> dict:
        data = asdict(self)
        data["started_at"] = self.started_at.isoformat()
        data["finished_at"] = self.finished_at.isoformat() if self.finished_at else None
        return data


@dataclass
class VendorBatch:
    """One vendor and the evaluations of its tracked documents, in evaluation order."""

    vendor_id: str
    status: str
    contact_email: str | None
    company_name: str
    evaluations: list[DocumentEvaluation] = field(default_factory=list)


class ComplianceRunOrchestrator:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        notifier: Notifier,
        audit: AuditRecorder,
        *,
        client_id: str | None = None,
        mandatory_doc_types: Iterable[str] | None = None,
        expiring_window_days: int | None = None,
        sla_detector: SlaBreachDetector | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._session_factory = session_factory
        self._notifier = notifier
        self._audit = audit
        self._client_id = client_id or settings.default_client_id
        self._doc_types = list(mandatory_doc_types or settings.compliance_mandatory_doc_types)
        self._window = timedelta(
            days=expiring_window_days
            if expiring_window_days is not None
            else settings.compliance_expiring_window_days
        )
        self._sla = sla_detector or SlaBreachDetector(
            session_factory, notifier, audit, client_id=self._client_id
        )
        self._clock = clock
        self._lock = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    async def run(self, now: datetime | None = None) -> RunSummary:
        """Execute one compliance pass.

        Raises RunInProgressError if another pass is still running; no other
        exception escapes.
        """
        if self._lock.locked():
            raise RunInProgressError()
        async with self._lock:
            return await self._execute(as_utc(now or self._clock()))

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    async def _execute(self, now: datetime) -> RunSummary:
        summary = RunSummary(run_id=str(uuid.uuid4()), started_at=now)
        started = time.monotonic()
        logger.info("Compliance run %s started (reference time %s)", summary.run_id, now.isoformat())

        try:
            batches = await self._load_batches(now, summary)
            decisions = {b.vendor_id: plan_vendor(b.status, b.evaluations) for b in batches}

            await self._send_reminders(batches, decisions, summary)

            for batch in batches:
                decision = decisions[batch.vendor_id]
                if isinstance(decision, SetNeedsRenewal):
                    await self._apply_renewal(batch, decision, summary)

            escalation = await self._sla.run(now)
            summary.sla_breaches = len(escalation.breaches)
            summary.escalation_sent = escalation.notified
        except Exception as exc:
            summary.outcome = "failed"
            summary.error = str(exc)
            summary.finished_at = utcnow()
            logger.exception("Compliance run %s failed", summary.run_id)
            await self._audit.record(
                CRON_JOB_ERROR,
                ENTITY_SYSTEM,
                None,
                {"job": JOB_NAME, "runId": summary.run_id, "error": str(exc)},
            )
            return summary

        summary.outcome = "completed"
        summary.finished_at = utcnow()
        logger.info(
            "Compliance run %s complete. Expired: %d, Expiring soon: %d, Flagged: %d, "
            "Failed vendors: %d. Duration: %.2fs",
            summary.run_id,
            summary.expired_documents,
            summary.expiring_soon_documents,
            summary.vendors_flagged,
            len(summary.failed_vendor_ids),
            time.monotonic() - started,
        )
        await self._audit.record(
            COMPLIANCE_RUN_COMPLETED, ENTITY_SYSTEM, None, summary.as_payload()
        )
        return summary

    async def _load_batches(self, now: datetime, summary: RunSummary) -> list[VendorBatch]:
        async with self._session_factory() as session:
            documents = await DocumentRepository(session, self._client_id).list_expiry_tracked(
                self._doc_types
            )

        batches: dict[str, VendorBatch] = {}
        for doc in documents:
            vendor = doc.vendor
            if vendor is None:
                continue
            state = classify_expiry(doc.expiry_date, now, self._window)
            summary.documents_checked += 1
            if state is ExpiryState.EXPIRED:
                summary.expired_documents += 1

            batch = batches.get(vendor.id)
            if batch is None:
                batch = batches[vendor.id] = VendorBatch(
                    vendor_id=vendor.id,
                    status=vendor.status,
                    contact_email=vendor.contact_email,
                    company_name=vendor.company_name,
                )
            batch.evaluations.append(
                DocumentEvaluation(
                    document=DocumentRef(
                        document_id=doc.id,
                        doc_type=doc.doc_type,
                        expiry_date=as_utc(doc.expiry_date),
                        file_name=doc.file_name,
                    ),
                    state=state,
                )
            )
        return list(batches.values())

    async def _send_reminders(
        self,
        batches: list[VendorBatch],
        decisions: dict[str, VendorDecision],
        summary: RunSummary,
    ) -> None:
        for batch in batches:
            decision = decisions[batch.vendor_id]
            if not isinstance(decision, NotifyExpiring):
                continue
            for document in decision.documents:
                summary.expiring_soon_documents += 1
                subject, body = messages.expiring_reminder(document)
                if await safe_send(self._notifier, batch.contact_email, subject, body):
                    summary.reminders_sent += 1
                else:
                    summary.reminders_failed += 1
                    logger.warning(
                        "Expiry reminder for document %s (vendor %s) was not delivered",
                        document.document_id, batch.vendor_id,
                    )

    async def _apply_renewal(
        self, batch: VendorBatch, decision: SetNeedsRenewal, summary: RunSummary
    ) -> None:
        try:
            async with self._session_factory() as session:
                changed = await VendorRepository(session, self._client_id).transition_status(
                    batch.vendor_id,
                    expected_status=batch.status,
                    new_status=decision.new_status,
                    review_notes=decision.reason,
                )
                await session.commit()
        except Exception:
            logger.exception("Status transition failed for vendor %s", batch.vendor_id)
            summary.failed_vendor_ids.append(batch.vendor_id)
            return

        if not changed:
            logger.warning(
                "Vendor %s left %s before the transition was written; skipped",
                batch.vendor_id, batch.status,
            )
            summary.vendors_skipped += 1
            return

        summary.vendors_flagged += 1
        await self._audit.record(
            VENDOR_STATUS_AUTOMATED,
            ENTITY_VENDOR,
            batch.vendor_id,
            {
                "oldStatus": batch.status,
                "newStatus": decision.new_status,
                "reason": decision.reason,
                "documentId": decision.document.document_id,
                "runId": summary.run_id,
            },
        )

        subject, body = messages.status_changed(decision.new_status, decision.reason)
        if not await safe_send(self._notifier, batch.contact_email, subject, body):
            summary.status_notifications_failed += 1
            logger.warning("Status change notice for vendor %s was not delivered", batch.vendor_id)
