"""API Layer — FastAPI routes, the request pipeline, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON; errors use {"msg"} or {"errors": [...]}
"""
