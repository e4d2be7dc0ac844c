"""Pydantic Schemas — request/response validation for API endpoints and parsed commands.

Invariants:
    - Schemas validate syntax at the system boundary (HTTP bodies, command text)
    - Domain invariants (duplicates, existence, pins) are NOT checked here
    - Domain types from core/ used for enum fields
"""
