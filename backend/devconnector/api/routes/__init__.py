"""Route Modules — one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes compose pipeline stages, core functions and repositories; the
      rules themselves live in core/

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
