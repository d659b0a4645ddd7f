"""Services Layer — resource store and the request-orchestrating service.

Invariants:
    - Services receive their collaborators through constructors (no globals)
    - Only the store touches the database session manager

Design Decisions:
    - Store and service split: persistence rules vs. request flow (ADR: single responsibility)
"""
