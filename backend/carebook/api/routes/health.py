"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the store is missing or its data file failed to load

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from carebook.infrastructure import store_manager as manager_module

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "carebook-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe: store initialized and data file loaded cleanly."""
    manager = manager_module.store_manager
    if manager is None or not manager.health_check():
        reason = "store_uninitialized" if manager is None else "data_file_corrupt"
        logger.warning(f"Readiness check failed: {reason}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": reason},
        )
    return {
        "status": "ready",
        "checks": {
            "store": "healthy",
            "autosave": "on" if manager.autosave else "off",
            "seniors": len(manager.store.seniors),
            "caregivers": len(manager.store.caregivers),
        },
    }
