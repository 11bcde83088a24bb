from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from api.models import HealthResponse, ReadyResponse
from api.services.container import ServiceContainer

from .deps import get_container

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
def health(container: ServiceContainer = Depends(get_container)) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        uptime=container.uptime_seconds(),
    )


@router.get("/ready", response_model=ReadyResponse)
def ready() -> ReadyResponse:
    return ReadyResponse(ready=True, timestamp=datetime.now(timezone.utc))
