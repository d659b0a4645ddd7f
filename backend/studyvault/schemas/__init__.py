"""API Schemas — Pydantic response models for API boundaries.

Invariants:
    - Schemas are the ONLY way data enters/leaves API endpoints
    - No ORM models exposed directly to the API layer
"""
