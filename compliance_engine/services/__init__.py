"""Services package — all business logic lives here, never in routers.

Files:
  expiry.py          — document expiry classification
  planner.py         — per-vendor decision (renewal / reminder / nothing)
  sla.py             — review SLA breach detection and escalation digest
  orchestrator.py    — one full compliance run with failure isolation
  scheduler.py       — daily trigger + eager run at process start
  notifier.py        — SMTP notifier (never raises)
  audit_recorder.py  — append-only audit writer (never raises)
  audit_log.py       — audit trail queries for the API
  messages.py        — notification subject / body templates

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. No FastAPI imports in services.
"""
