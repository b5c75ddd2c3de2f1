"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from api/, repositories/, infrastructure/, or db/
    - All functions are pure and deterministic (ids and clocks aside)

Design Decisions:
    - Functional core separated from imperative shell: routes orchestrate IO
      around these functions
"""
