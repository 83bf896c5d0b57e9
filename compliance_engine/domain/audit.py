"""SQLAlchemy ORM model for system audit trail."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from compliance_engine.db.base import Base
from compliance_engine.db.types import UTCDateTime
from compliance_engine.domain.mixins import TenantMixin


class AuditTrail(Base, TenantMixin):
    __tablename__ = "audit_trail"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    # Who (NULL = the system itself)
    user_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)

    # What
    action: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    entity_type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    entity_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)

    # Change data
    payload: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # When (no updated_at or deleted_at, audit rows are immutable)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        nullable=False,
        index=True,
    )
