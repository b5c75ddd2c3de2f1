"""Infrastructure Layer — store plumbing, hashing, and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/ or repositories/
    - Store failures surface as DatabaseError, never raw driver exceptions
"""
