"""FastAPI routers for the interpreter host.

- system: health check
- view: snapshot, field edits, clicks, reset
"""
