"""API Schemas — Pydantic models at the HTTP boundary.

Invariants:
    - Response models serialize ids under "_id" (the SPA's field name)
    - No response model exposes password hashes
"""
