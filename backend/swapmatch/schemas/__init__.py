"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate types at the system boundary; domain limits stay in core/
"""
