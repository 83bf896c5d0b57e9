"""Vendor Compliance Engine — FastAPI application factory."""


import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from compliance_engine.core.config import settings
from compliance_engine.core.exceptions import register_exception_handlers
from compliance_engine.db.base import async_session_factory, engine
from compliance_engine.schemas.common import HealthResponse, SchedulerState
from compliance_engine.services.audit_recorder import AuditRecorder
from compliance_engine.services.notifier import SmtpNotifier
from compliance_engine.services.orchestrator import ComplianceRunOrchestrator
from compliance_engine.services.scheduler import ComplianceScheduler

# v1 routers
from compliance_engine.routers.v1.audit import router as audit_v1_router
from compliance_engine.routers.v1.compliance import router as compliance_v1_router

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Set up structured logging for the application."""
    level = logging.DEBUG if settings.app_env == "development" else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_scheduler() -> ComplianceScheduler:
    """Wire the production scheduler: SMTP notifier, DB audit recorder, default tenant."""
    audit = AuditRecorder(async_session_factory, settings.default_client_id)
    orchestrator = ComplianceRunOrchestrator(
        async_session_factory,
        SmtpNotifier(),
        audit,
        client_id=settings.default_client_id,
    )
    return ComplianceScheduler(
        orchestrator,
        hour=settings.compliance_schedule_hour,
        minute=settings.compliance_schedule_minute,
        tz=settings.compliance_timezone,
        run_on_start=settings.compliance_run_on_start,
    )


def create_app(
    scheduler: ComplianceScheduler | None = None,
    *,
    start_scheduler: bool | None = None,
) -> FastAPI:
    _configure_logging()

    if start_scheduler is None:
        start_scheduler = settings.compliance_scheduler_enabled

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.scheduler = scheduler or build_scheduler()
        app.state.scheduler_enabled = start_scheduler
        if start_scheduler:
            await app.state.scheduler.start()
        else:
            logger.info("Compliance scheduler disabled; runs only on demand")
        try:
            yield
        finally:
            await app.state.scheduler.stop()
            await engine.dispose()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url="/docs" if settings.app_env == "development" else None,
        redoc_url="/redoc" if settings.app_env == "development" else None,
        lifespan=lifespan,
    )

    # --- Global exception handlers ---
    register_exception_handlers(app)

    # --- v1 API routes (/api/v1/*) ---
    app.include_router(compliance_v1_router, prefix="/api/v1")
    app.include_router(audit_v1_router, prefix="/api/v1")

    # --- Health check ---
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health():
        sched: ComplianceScheduler = app.state.scheduler
        return HealthResponse(
            app=settings.app_name,
            env=settings.app_env,
            scheduler=SchedulerState(
                enabled=app.state.scheduler_enabled,
                running=sched.running,
                run_in_progress=sched.run_in_progress,
                timezone=sched.timezone_name,
                next_run_at=sched.next_run_at,
            ),
        )

    return app


app = create_app()
