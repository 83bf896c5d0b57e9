"""Audit trail repository — append and read only."""

from __future__ import annotations

from typing import Any

from compliance_engine.domain.audit import AuditTrail
from compliance_engine.repositories.base import BaseRepository


class AuditRepository(BaseRepository[AuditTrail]):
    model = AuditTrail

    async def append(
        self,
        *,
        user_id: str | None,
        action: str,
        entity_type: str,
        entity_id: str | None,
        payload: dict[str, Any] | None,
        description: str | None = None,
    ) -> AuditTrail:
        return await self.add(
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            payload=payload,
            description=description,
        )
