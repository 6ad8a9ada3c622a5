"""
Health check endpoints.

Provides liveness and readiness probes with a persistence connectivity check.
"""

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from commanders_vault.api.deps import RegistryDep

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(response: Response, registry: RegistryDep) -> HealthResponse:
    """
    Readiness probe.

    Returns ready if the service can handle requests.
    Checks the card store anonymously. Returns 503 if it is unreachable.
    """
    if await registry.store_factory(None).ping():
        return HealthResponse(status="ready", database="connected")

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(status="not ready", database="disconnected")
