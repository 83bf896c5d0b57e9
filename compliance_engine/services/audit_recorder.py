"""Append-only audit recorder.

Each entry is written in its own session and committed immediately, so an
audit row survives even when the surrounding work fails. Write failures are
logged and swallowed: auditing must never break the caller.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from compliance_engine.repositories.audit import AuditRepository

logger = logging.getLogger(__name__)

# Action codes written by the compliance engine
VENDOR_STATUS_AUTOMATED = "VENDOR_STATUS_AUTOMATED"
SLA_ESCALATION = "SLA_ESCALATION"
COMPLIANCE_RUN_COMPLETED = "COMPLIANCE_RUN_COMPLETED"
CRON_JOB_ERROR = "CRON_JOB_ERROR"

# Entity types
ENTITY_VENDOR = "Vendor"
ENTITY_SYSTEM = "System"


class AuditRecorder:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession], client_id: str):
        self._session_factory = session_factory
        self._client_id = client_id

    async def record(
        self,
        action: str,
        entity_type: str,
        entity_id: str | None = None,
        payload: dict[str, Any] | None = None,
        *,
        actor_id: str | None = None,
        description: str | None = None,
    ) -> bool:
        """Append one audit row. Returns False when the write failed."""
        try:
            async with self._session_factory() as session:
                await AuditRepository(session, self._client_id).append(
                    user_id=actor_id,
                    action=action,
                    entity_type=entity_type,
                    entity_id=entity_id,
                    payload=payload,
                    description=description,
                )
                await session.commit()
        except Exception:
            logger.exception("Failed to write audit entry %s for %s %s", action, entity_type, entity_id)
            return False
        return True
