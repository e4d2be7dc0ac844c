"""Infrastructure Layer — file storage, store lifecycle, and cross-cutting concerns.

Invariants:
    - Filesystem errors mapped to StorageError before leaving this layer
    - Store codec logic stays in core/store_snapshot; this layer only moves bytes

Design Decisions:
    - Singleton store manager initialized by the FastAPI lifespan, never at import
"""
