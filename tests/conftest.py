"""Shared fixtures: in-memory database, recording notifier, seed helpers."""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import pytest
from sqlalchemy import select
from sqlalchemy.pool import StaticPool

import compliance_engine.domain  # noqa: F401  (register models)
from compliance_engine.db.base import Base, build_engine, build_session_factory
from compliance_engine.domain import AuditTrail, User, Vendor, VendorDocument
from compliance_engine.services.audit_recorder import AuditRecorder
from compliance_engine.services.orchestrator import ComplianceRunOrchestrator

CLIENT_ID = "test-client"
NOW = datetime(2026, 10, 17, 9, 0, tzinfo=timezone.utc)


class RecordingNotifier:
    """Notifier fake: records every send, fails for addresses in ``fail_for``."""

    def __init__(self, fail_for: Optional[set] = None):
        self.sent: list[dict[str, Any]] = []
        self.fail_for = fail_for or set()

    async def send(self, recipient, subject, body) -> bool:
        self.sent.append({"to": recipient, "subject": subject, "body": body})
        return bool(recipient) and recipient not in self.fail_for

    def to(self, recipient: str) -> list[dict[str, Any]]:
        return [m for m in self.sent if m["to"] == recipient]


# ============================================================================
# Database
# ============================================================================

@pytest.fixture
async def session_factory():
    engine = build_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield build_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def audit(session_factory):
    return AuditRecorder(session_factory, CLIENT_ID)


@pytest.fixture
def orchestrator(session_factory, notifier, audit):
    return ComplianceRunOrchestrator(
        session_factory,
        notifier,
        audit,
        client_id=CLIENT_ID,
        clock=lambda: NOW,
    )


# ============================================================================
# Seed / query helpers
# ============================================================================

async def add_vendor(factory, *, status="ACTIVE", email=None, name="Acme Trading",
                     created_at=None, **extra) -> Vendor:
    vendor = Vendor(
        client_id=CLIENT_ID,
        company_name=name,
        contact_email=email,
        status=status,
        created_at=created_at or NOW - timedelta(days=1),
        **extra,
    )
    async with factory() as session:
        session.add(vendor)
        await session.commit()
    return vendor


async def add_document(factory, vendor: Vendor, *, doc_type="COMMERCIAL_REGISTRATION",
                       expiry_date=None, file_name="registration.pdf") -> VendorDocument:
    doc = VendorDocument(
        client_id=CLIENT_ID,
        vendor_id=vendor.id,
        doc_type=doc_type,
        expiry_date=expiry_date,
        file_name=file_name,
    )
    async with factory() as session:
        session.add(doc)
        await session.commit()
    return doc


async def add_user(factory, *, name="Pat Reviewer", email="reviewer@example.com",
                   role="PROCUREMENT_MANAGER", is_active=True) -> User:
    user = User(client_id=CLIENT_ID, name=name, email=email, role=role, is_active=is_active)
    async with factory() as session:
        session.add(user)
        await session.commit()
    return user


async def fetch_vendor(factory, vendor_id: str) -> Vendor:
    async with factory() as session:
        return await session.get(Vendor, vendor_id)


async def audit_entries(factory, action: Optional[str] = None) -> list[AuditTrail]:
    q = select(AuditTrail).order_by(AuditTrail.created_at)
    if action:
        q = q.where(AuditTrail.action == action)
    async with factory() as session:
        return list((await session.execute(q)).scalars().all())
