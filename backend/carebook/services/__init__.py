"""Services Layer — operation handlers, command parser, and command dispatch.

Invariants:
    - Handlers split by concern (persons, assignment, pins, queries)
    - Every mutating handler runs its read-validate-commit sequence inside store.batch()
    - Command dispatch uses explicit dict mapping (no auto-discovery)

Design Decisions:
    - One handler file per concern for locality; rule checks stay in core/enforce_*
"""
