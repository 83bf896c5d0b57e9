"""Daily compliance scheduler.

Lifecycle: ``start()`` once at process start (the first run happens right
away when ``run_on_start`` is set), ``stop()`` at shutdown to cancel the
pending trigger. The daily trigger is a wall-clock time in a named timezone
so runs land at the same local hour whatever the server's timezone is.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from compliance_engine.core.exceptions import RunInProgressError
from compliance_engine.domain.mixins import utcnow
from compliance_engine.services.orchestrator import ComplianceRunOrchestrator, RunSummary

logger = logging.getLogger(__name__)


class ComplianceScheduler:
    def __init__(
        self,
        orchestrator: ComplianceRunOrchestrator,
        *,
        hour: int = 1,
        minute: int = 0,
        tz: str = "Asia/Riyadh",
        run_on_start: bool = True,
    ):
        self._orchestrator = orchestrator
        self._hour = hour
        self._minute = minute
        self._tz = ZoneInfo(tz)
        self._run_on_start = run_on_start
        self._task: asyncio.Task | None = None

        self.next_run_at: datetime | None = None
        self.last_summary: RunSummary | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def run_in_progress(self) -> bool:
        return self._orchestrator.is_running

    @property
    def timezone_name(self) -> str:
        return self._tz.key

    def next_trigger_after(self, moment: datetime) -> datetime:
        """First scheduled local time strictly after ``moment``, returned in UTC."""
        local = moment.astimezone(self._tz)
        candidate = local.replace(hour=self._hour, minute=self._minute, second=0, microsecond=0)
        if candidate <= local:
            candidate = (local + timedelta(days=1)).replace(
                hour=self._hour, minute=self._minute, second=0, microsecond=0
            )
        return candidate.astimezone(timezone.utc)

    async def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name="compliance-scheduler")
        logger.info(
            "Compliance scheduler started: daily at %02d:%02d %s",
            self._hour, self._minute, self._tz.key,
        )

    async def stop(self) -> None:
        task, self._task = self._task, None
        self.next_run_at = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Compliance scheduler stopped")

    async def run_now(self) -> RunSummary:
        """Run immediately. Raises RunInProgressError when a run is already going."""
        summary = await self._orchestrator.run()
        self.last_summary = summary
        return summary

    async def trigger(self) -> RunSummary | None:
        """Scheduled entry point: an overlapping trigger is skipped, not queued."""
        try:
            return await self.run_now()
        except RunInProgressError:
            logger.warning("Compliance run still in progress; skipping this trigger")
            return None

    async def _loop(self) -> None:
        if self._run_on_start:
            await self._safe_trigger()
        while True:
            now = utcnow()
            self.next_run_at = self.next_trigger_after(now)
            logger.info("Next compliance run at %s", self.next_run_at.isoformat())
            await asyncio.sleep((self.next_run_at - now).total_seconds())
            await self._safe_trigger()

    async def _safe_trigger(self) -> None:
        try:
            await self.trigger()
        except Exception:
            # Keep the daily cadence alive whatever happened in this run
            logger.exception("Compliance trigger failed")
