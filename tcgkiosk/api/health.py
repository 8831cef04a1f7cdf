"""
Health check endpoints.

Provides liveness and readiness probes with card database checks.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from tcgkiosk.services.catalog_loader import CatalogCache, get_catalog_cache

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    catalog: str | None = None
    games: int | None = None


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
def ready(
    response: Response,
    cache: Annotated[CatalogCache, Depends(get_catalog_cache)],
) -> HealthResponse:
    """
    Readiness probe.

    Returns ready once the catalog is built and holds at least one game.
    Returns 503 when the card database yielded no games.
    """
    catalog = cache.get()
    if not catalog.groups:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", catalog="empty", games=0)
    return HealthResponse(status="ready", catalog="loaded", games=len(catalog.groups))
