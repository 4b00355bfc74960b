"""
Liveness and readiness probes.

Readiness means Scryfall resolves a known card through the shared
resolver, so the probe exercises the same throttle and cache as commands.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from wantboard.services.catalog_resolver import check_catalog_connection
from wantboard.services.container import WantBoardServices, get_services

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    catalog: str | None = None
    cached_cards: int | None = None
    spaces: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Process is up. No dependency is checked."""
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    services: Annotated[WantBoardServices, Depends(get_services)],
) -> HealthResponse:
    """
    Scryfall is reachable.

    A fresh cache entry for the probe card answers without a request, so
    polling this endpoint costs at most one Scryfall call per TTL.
    Responds 503 when the catalog cannot be reached.
    """
    reachable = await check_catalog_connection(services.resolver)
    if not reachable:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="ready" if reachable else "not ready",
        catalog="connected" if reachable else "unreachable",
        cached_cards=len(services.card_cache),
        spaces=len(services.store),
    )
