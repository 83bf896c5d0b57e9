"""Pydantic schemas package.

Folder intent:
  common.py      — CamelModel base + HealthResponse (all schemas inherit CamelModel)
  compliance.py  — run summary and scheduler state
  audit.py       — audit trail entries
"""
