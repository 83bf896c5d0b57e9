"""Compliance run schemas."""


from datetime import datetime

from compliance_engine.schemas.common import CamelModel


class RunSummaryOut(CamelModel):
    run_id: str
    outcome: str
    started_at: datetime
    finished_at: datetime | None = None
    documents_checked: int
    expired_documents: int
    expiring_soon_documents: int
    reminders_sent: int
    reminders_failed: int
    vendors_flagged: int
    vendors_skipped: int
    failed_vendor_ids: list[str]
    status_notifications_failed: int
    sla_breaches: int
    escalation_sent: bool
    error: str | None = None
