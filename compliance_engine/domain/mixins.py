"""Reusable SQLAlchemy column mixins."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import String, func
from sqlalchemy.orm import Mapped, mapped_column

from compliance_engine.db.types import UTCDateTime


def utcnow() -> datetime:
    """Timezone-aware current UTC time; every stored timestamp is UTC."""
    return datetime.now(timezone.utc)


class TimestampMixin:
    """Adds created_at, updated_at, deleted_at columns."""

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=utcnow, server_default=func.now(), nullable=False,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        UTCDateTime(), nullable=True, default=None
    )


class TenantMixin:
    """Adds client_id column for multi-tenancy."""

    client_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
