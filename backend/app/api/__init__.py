"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses
    - Authentication and role checks happen in dependencies.py, before any service call

Design Decisions:
    - Thin routes delegate to services
"""
