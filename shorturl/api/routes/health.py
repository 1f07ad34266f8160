"""Health check endpoints for monitoring application status."""

import time

from fastapi import APIRouter, Depends, status

from shorturl.api import schemas
from shorturl.api.dependencies import get_store
from shorturl.core.config import settings
from shorturl.store.base import MappingStore

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=schemas.HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Get system health status",
    response_description="Health status of all system components"
)
async def health_check(store: MappingStore = Depends(get_store)):
    """Check health of all system components."""
    health_status = {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
        "timestamp": time.time(),
        "components": {}
    }

    start_time = time.perf_counter()
    try:
        reachable = await store.ping()
        error = None if reachable else f"{store.name} ping failed"
    except Exception as e:
        reachable = False
        error = str(e)

    if reachable:
        health_status["components"][store.name] = {
            "status": "healthy",
            "latency_ms": round((time.perf_counter() - start_time) * 1000, 2),
        }
    else:
        health_status["status"] = "degraded"
        health_status["components"][store.name] = {
            "status": "unhealthy",
            "error": error,
        }

    return health_status


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness probe",
    response_description="Application readiness status"
)
async def readiness_probe(store: MappingStore = Depends(get_store)):
    """Check if application is ready to handle requests."""
    components_status = {"api": True, "store": False}

    try:
        components_status["store"] = await store.ping()
    except Exception:
        components_status["store"] = False

    return {
        "ready": all(components_status.values()),
        "components": components_status
    }


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    response_description="Application liveness status"
)
async def liveness_probe():
    """Simple check that application is running."""
    return {"alive": True}
