"""Health & Readiness Probes — liveness and database readiness.

Invariants:
    - GET /api/v1/health/ answers 200 while the process is up, without touching the DB
    - GET /api/v1/health/ready answers 503 until db_manager exists and SELECT 1 succeeds
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from feedline.infrastructure import database
from feedline.infrastructure.observability import SERVICE_NAME

API_VERSION = "0.1.0"

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {"status": "healthy", "service": SERVICE_NAME, "version": API_VERSION}


@router.get("/ready")
async def readiness():
    """Ready only when the timeline store can be queried."""
    # Read through the module: tests and lifespan swap db_manager at runtime
    manager = database.db_manager
    if manager is None:
        return _not_ready("database_not_initialized")
    if not await manager.health_check():
        return _not_ready("database_unavailable")
    return {"status": "ready", "checks": {"database": "healthy"}}


def _not_ready(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason},
    )
