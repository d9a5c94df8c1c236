"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (form data, JSON bodies, API responses)
    - Untyped form values are converted once, here, before reaching services/

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
