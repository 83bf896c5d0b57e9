"""Audit trail router (read-only)."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from compliance_engine.core.config import settings
from compliance_engine.core.pagination import PaginationParams
from compliance_engine.core.response import ListResponse, paginated
from compliance_engine.db.base import get_db
from compliance_engine.schemas.audit import AuditEntryOut
from compliance_engine.services.audit_log import AuditLogService

router = APIRouter(prefix="/audit", tags=["Audit"])


@router.get("", response_model=ListResponse[AuditEntryOut])
async def list_audit_entries(
    action: Optional[str] = Query(default=None, description="e.g. VENDOR_STATUS_AUTOMATED"),
    entity_type: Optional[str] = Query(default=None, alias="entityType"),
    entity_id: Optional[str] = Query(default=None, alias="entityId"),
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
):
    """List audit entries, newest first. Filter by action / entityType / entityId."""
    items, total = await AuditLogService(session, settings.default_client_id).list_entries(
        pagination, action=action, entity_type=entity_type, entity_id=entity_id,
    )
    return paginated([AuditEntryOut.model_validate(e) for e in items], total, pagination)
