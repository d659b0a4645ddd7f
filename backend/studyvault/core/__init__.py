"""Core Layer — pure domain logic, no DB, no async.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (auth_gate reads only its secret)

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
