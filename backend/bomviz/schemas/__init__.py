"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (browser input, API responses)
    - Core records are mapped into schemas in routes, never the reverse
"""
