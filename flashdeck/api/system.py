"""Health and metrics endpoints"""

from fastapi import APIRouter
from fastapi.responses import Response

from flashdeck.core.config import settings
from flashdeck.core.database import db_manager
from flashdeck.core.metrics import metrics_endpoint
from flashdeck.shared.schemas import HealthResponse

router = APIRouter(prefix="/observability", tags=["System"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for load balancer."""
    postgres_ok = await db_manager.health_check()
    dependencies = {"postgres": "healthy" if postgres_ok else "unhealthy"}
    return HealthResponse(
        status="healthy" if postgres_ok else "unhealthy",
        version=settings.app.version,
        dependencies=dependencies,
    )


@router.get("/ready")
async def readiness_check() -> dict[str, bool]:
    """Readiness check endpoint."""
    return {"ready": True}


@router.get("/live")
async def liveness_check() -> dict[str, bool]:
    """Liveness check endpoint."""
    return {"alive": True}


@router.get("/metrics")
async def get_metrics() -> Response:
    """Prometheus metrics endpoint."""
    return await metrics_endpoint()
