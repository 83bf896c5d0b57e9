"""SQLAlchemy ORM model for Vendors.

Only ``status``, ``review_notes`` and ``updated_at`` are written by the
compliance engine; everything else is owned by the onboarding flow.
"""

from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from compliance_engine.db.base import Base
from compliance_engine.core.enums import VendorStatus
from compliance_engine.domain.mixins import TenantMixin, TimestampMixin


class Vendor(Base, TenantMixin, TimestampMixin):
    __tablename__ = "vendors"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    # Human-facing identifier, e.g. "VEN-2024-0042"
    vendor_code: Mapped[Optional[str]] = mapped_column(String(50), unique=True, nullable=True)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    contact_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    contact_email: Mapped[Optional[str]] = mapped_column(String(255), index=True, nullable=True)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # NEW | UNDER_REVIEW | APPROVED | ACTIVE | NEEDS_RENEWAL | REJECTED
    status: Mapped[str] = mapped_column(
        String(50), default=VendorStatus.NEW.value, nullable=False, index=True
    )
    # Reason for the latest status change (machine-generated for automated changes)
    review_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    documents: Mapped[List["VendorDocument"]] = relationship(
        back_populates="vendor", lazy="raise"
    )

    @property
    def display_code(self) -> str:
        return self.vendor_code or self.id
