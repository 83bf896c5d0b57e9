"""SLA breach detection for vendor submissions waiting on a human reviewer.

The detector only notifies. Moving a stale submission forward is always a
reviewer's decision, so no vendor row is written here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from compliance_engine.core.config import settings
from compliance_engine.repositories.user import UserRepository
from compliance_engine.repositories.vendor import VendorRepository
from compliance_engine.services import messages
from compliance_engine.services.audit_recorder import ENTITY_SYSTEM, SLA_ESCALATION, AuditRecorder
from compliance_engine.services.expiry import as_utc
from compliance_engine.services.notifier import Notifier, safe_send

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StaleVendor:
    vendor_id: str
    display_code: str
    company_name: str
    submitted_at: datetime


@dataclass
class EscalationResult:
    breaches: list[StaleVendor] = field(default_factory=list)
    recipient: str | None = None
    notified: bool = False

    @property
    def escalated(self) -> bool:
        return self.recipient is not None


class SlaBreachDetector:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        notifier: Notifier,
        audit: AuditRecorder,
        *,
        client_id: str | None = None,
        review_status: str | None = None,
        escalation_role: str | None = None,
        sla_hours: int | None = None,
    ):
        self._session_factory = session_factory
        self._notifier = notifier
        self._audit = audit
        self._client_id = client_id or settings.default_client_id
        self._review_status = review_status or settings.compliance_review_status
        self._escalation_role = escalation_role or settings.compliance_escalation_role
        self._sla_hours = sla_hours if sla_hours is not None else settings.compliance_sla_hours

    @property
    def sla_hours(self) -> int:
        return self._sla_hours

    async def find_breaches(self, now: datetime) -> list[StaleVendor]:
        threshold = now - timedelta(hours=self._sla_hours)
        async with self._session_factory() as session:
            vendors = await VendorRepository(session, self._client_id).list_in_status_created_before(
                self._review_status, threshold
            )
        return [
            StaleVendor(
                vendor_id=v.id,
                display_code=v.display_code,
                company_name=v.company_name,
                submitted_at=as_utc(v.created_at),
            )
            for v in vendors
        ]

    async def run(self, now: datetime) -> EscalationResult:
        """Send one digest to the escalation reviewer covering every breaching vendor."""
        result = EscalationResult(breaches=await self.find_breaches(now))
        if not result.breaches:
            logger.info("SLA check: no submissions over %sh", self._sla_hours)
            return result

        async with self._session_factory() as session:
            reviewer = await UserRepository(session, self._client_id).first_active_with_role(
                self._escalation_role
            )
        if reviewer is None:
            logger.warning(
                "SLA check: %d breaching submissions but no active %s user; escalation skipped",
                len(result.breaches), self._escalation_role,
            )
            return result

        subject, body = messages.sla_digest(reviewer.name, result.breaches, self._sla_hours)
        result.recipient = reviewer.email
        result.notified = await safe_send(self._notifier, reviewer.email, subject, body)

        await self._audit.record(
            SLA_ESCALATION,
            ENTITY_SYSTEM,
            None,
            {
                "count": len(result.breaches),
                "staleVendors": [v.vendor_id for v in result.breaches],
                "recipient": reviewer.email,
                "notified": result.notified,
            },
        )
        logger.info(
            "SLA check: escalated %d submissions to %s (sent=%s)",
            len(result.breaches), reviewer.email, result.notified,
        )
        return result
