"""Audit trail read service used by the audit API."""


from sqlalchemy.ext.asyncio import AsyncSession

from compliance_engine.core.pagination import PaginationParams
from compliance_engine.repositories.audit import AuditRepository


class AuditLogService:
    def __init__(self, session: AsyncSession, client_id: str):
        self._repo = AuditRepository(session, client_id)

    async def list_entries(
        self,
        pagination: PaginationParams,
        *,
        action: str | None = None,
        entity_type: str | None = None,
        entity_id: str | None = None,
    ):
        return await self._repo.page(
            pagination, action=action, entity_type=entity_type, entity_id=entity_id
        )
