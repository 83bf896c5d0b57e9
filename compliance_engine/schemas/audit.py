"""Audit trail schemas."""


from datetime import datetime
from typing import Any

from compliance_engine.schemas.common import CamelModel

class AuditEntryOut(CamelModel):
    id: str
    user_id: str | None = None
    action: str
    entity_type: str
    entity_id: str | None = None
    payload: Any = None
    description: str | None = None
    created_at: datetime
