"""API Layer — FastAPI routes, trigger authentication and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses

Design Decisions:
    - Thin routes delegate to services (functional core, imperative shell)
"""
