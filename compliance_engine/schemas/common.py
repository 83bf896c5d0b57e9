"""Shared Pydantic schema base with camelCase aliases."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """All API schemas inherit from this to auto-generate camelCase aliases."""

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
        "from_attributes": True,
    }


class SchedulerState(CamelModel):
    enabled: bool
    running: bool
    run_in_progress: bool
    timezone: str
    next_run_at: datetime | None = None


class HealthResponse(CamelModel):
    """Health-check response returned by /health."""
    status: str = "ok"
    app: str
    env: str
    scheduler: SchedulerState
