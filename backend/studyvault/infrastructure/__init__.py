"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All driver exceptions mapped to core/errors.py types

Design Decisions:
    - Thin wrappers over raw clients (ADR: single responsibility)
"""
