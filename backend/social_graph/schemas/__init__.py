"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate shape at the system boundary (lengths, array sizes)
    - Relationship rules (self-reference, existence) are NOT checked here

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
