"""Domain package — all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  vendor.py    — Vendor qualification record (status + review notes)
  document.py  — Compliance documents uploaded by vendors
  user.py      — Internal users (reviewer directory for escalations)
  audit.py     — Immutable audit trail (never updated or deleted)
  mixins.py    — Shared TimestampMixin, TenantMixin
"""

from compliance_engine.core.enums import DocumentType, UserRole, VendorStatus
from compliance_engine.domain.audit import AuditTrail
from compliance_engine.domain.document import VendorDocument
from compliance_engine.domain.user import User
from compliance_engine.domain.vendor import Vendor

__all__ = [
    "AuditTrail",
    "DocumentType",
    "User",
    "UserRole",
    "Vendor",
    "VendorDocument",
    "VendorStatus",
]
