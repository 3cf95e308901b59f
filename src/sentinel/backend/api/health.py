# sentinel/backend/api/health.py
from __future__ import annotations

import time

from fastapi import APIRouter, Request

from sentinel.backend.api.schemas import HealthResponse
from sentinel.backend.core.utils import utc_now

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    state = request.app.state
    return HealthResponse(
        status="HEALTHY",
        version=state.settings.app_version,
        uptime=round(time.monotonic() - state.started_at, 3),
        timestamp=utc_now(),
        details={"storage_backend": state.settings.storage_backend},
    )
