"""SQLAlchemy ORM model for vendor compliance documents."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from compliance_engine.db.base import Base
from compliance_engine.db.types import UTCDateTime
from compliance_engine.domain.mixins import TenantMixin, TimestampMixin


class VendorDocument(Base, TenantMixin, TimestampMixin):
    """One uploaded document. Only mandatory types with an expiry date are tracked."""

    __tablename__ = "vendor_documents"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    vendor_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # See DocumentType for the known values
    doc_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    expiry_date: Mapped[Optional[datetime]] = mapped_column(
        UTCDateTime(), index=True, nullable=True
    )

    # File metadata (the file itself lives in blob storage)
    file_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    file_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    file_size_bytes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    mime_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    vendor: Mapped["Vendor"] = relationship(back_populates="documents", lazy="joined")
