"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Pagination query values are NOT validated here (core/page_request.py owns that)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
