"""Health Probe: liveness endpoint for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up
"""

from fastapi import APIRouter, status

from swapmatch.api.dependencies import Services

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
def health_check(services: Services):
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "swapmatch-api",
        "version": "0.1.0",
        "last_swap_id": services.registry.get_last_swap_id(),
    }
