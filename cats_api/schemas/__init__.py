"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Domain invariants live in core/, schemas only check shape

Design Decisions:
    - Separate from core entities: schemas are API contracts, entities are domain
"""
