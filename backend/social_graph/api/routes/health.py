"""Health Probes — liveness and database readiness, no authentication.

Invariants:
    - GET /api/v1/health/ answers 200 whenever the process can serve requests
    - GET /api/v1/health/ready answers 503 until the lifespan-owned database
      manager exists and a SELECT 1 succeeds
    - Both report the deployment's exclusion variant
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from social_graph.infrastructure.observability import SERVICE_NAME

router = APIRouter(prefix="/api/v1/health", tags=["health"])


def _variant(request: Request) -> str | None:
    policy = getattr(request.app.state, "exclusion_policy", None)
    return policy.variant.value if policy else None


@router.get("/")
async def liveness(request: Request):
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": request.app.version,
        "exclusion_variant": _variant(request),
    }


@router.get("/ready")
async def readiness(request: Request):
    """503 while the database is unreachable, so the balancer holds traffic back."""
    db_manager = getattr(request.app.state, "db_manager", None)
    if db_manager is None or not await db_manager.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy"},
        "exclusion_variant": _variant(request),
    }
