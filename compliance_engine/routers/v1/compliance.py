"""Compliance run endpoints.

A manual run goes through the same scheduler and overlap guard as the daily
trigger, so it can never double up with a scheduled run (409 instead).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from compliance_engine.core.exceptions import NotFoundError
from compliance_engine.core.response import DataResponse
from compliance_engine.schemas.compliance import RunSummaryOut
from compliance_engine.services.scheduler import ComplianceScheduler

router = APIRouter(prefix="/compliance", tags=["Compliance"])


def get_scheduler(request: Request) -> ComplianceScheduler:
    return request.app.state.scheduler


@router.post("/runs", response_model=DataResponse[RunSummaryOut])
async def trigger_run(scheduler: ComplianceScheduler = Depends(get_scheduler)):
    """Run the expiry check and SLA escalation now and return the summary."""
    summary = await scheduler.run_now()
    return {"data": RunSummaryOut.model_validate(summary)}


@router.get("/runs/last", response_model=DataResponse[RunSummaryOut])
async def last_run(scheduler: ComplianceScheduler = Depends(get_scheduler)):
    if scheduler.last_summary is None:
        raise NotFoundError("Compliance run")
    return {"data": RunSummaryOut.model_validate(scheduler.last_summary)}
