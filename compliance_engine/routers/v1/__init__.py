"""v1 router package — all /api/v1/* endpoints live here.

Files:
  compliance.py  — manual compliance runs and the last run summary
  audit.py       — read-only audit trail listing

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to compliance_engine/services/.
"""
