"""Core Layer — pure domain logic for the senior/caregiver store, no IO, no async.

Invariants:
    - No module in core/ imports from services/, api/, schemas/ or infrastructure/
    - All mutation of person data goes through CareStore public operations

Design Decisions:
    - Functional core separated from imperative shell (ADR: pure/impure sandwich)
    - Rule checks live in enforce_*.py so handlers stay thin
"""
