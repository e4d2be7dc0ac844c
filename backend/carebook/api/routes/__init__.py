"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain business logic (delegate to services/ handlers)

Design Decisions:
    - Explicit registration in main.py over auto-discovery
    - Plain `def` endpoints: the store is synchronous and lock-guarded, so
      FastAPI runs them in its worker thread pool
"""
