# sentinel/backend/api/runs.py
from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Request

from sentinel.backend.api.deps import get_run_service, publish_event
from sentinel.backend.api.schemas import (
    ReportAttachRequest,
    ResultUpdateRequest,
    RunCreateRequest,
    RunPageResponse,
    RunResponse,
    RunStatusUpdateRequest,
    SuccessResponse,
)
from sentinel.backend.core.simulation.service import RunService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/runs", tags=["simulation-runs"])


@router.post("", response_model=RunResponse, status_code=201)
async def create_run(
    req: RunCreateRequest,
    request: Request,
    service: RunService = Depends(get_run_service),
) -> RunResponse:
    change = await service.create_run(**req.model_dump(exclude_none=True))
    publish_event(request, change.event)
    return RunResponse.from_run(change.run)


@router.get("", response_model=RunPageResponse)
async def list_runs(
    project_path: str | None = None,
    status: str | None = None,
    tool_version: str | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    page: int = 1,
    per_page: int | None = None,
    service: RunService = Depends(get_run_service),
) -> RunPageResponse:
    result = await service.list_runs(
        project_path=project_path,
        status=status,
        tool_version=tool_version,
        date_from=date_from,
        date_to=date_to,
        page=page,
        per_page=per_page,
    )
    return RunPageResponse.from_page(result)


@router.get("/{run_id}", response_model=RunResponse)
async def get_run(
    run_id: str,
    service: RunService = Depends(get_run_service),
) -> RunResponse:
    return RunResponse.from_run(await service.get_run(run_id))


@router.patch("/{run_id}/status", response_model=RunResponse)
async def update_run_status(
    run_id: str,
    req: RunStatusUpdateRequest,
    request: Request,
    service: RunService = Depends(get_run_service),
) -> RunResponse:
    change = await service.update_status(run_id, req.status, req.result_payload)
    publish_event(request, change.event)
    return RunResponse.from_run(change.run)


@router.post("/{run_id}/retry", response_model=RunResponse)
async def retry_run(
    run_id: str,
    request: Request,
    service: RunService = Depends(get_run_service),
) -> RunResponse:
    change = await service.retry_run(run_id)
    publish_event(request, change.event)
    return RunResponse.from_run(change.run)


@router.post("/{run_id}/report", response_model=RunResponse)
async def attach_report(
    run_id: str,
    req: ReportAttachRequest,
    request: Request,
    service: RunService = Depends(get_run_service),
) -> RunResponse:
    change = await service.attach_report(run_id, req.location)
    publish_event(request, change.event)
    return RunResponse.from_run(change.run)


@router.put("/{run_id}/result", response_model=RunResponse)
async def update_run_result(
    run_id: str,
    req: ResultUpdateRequest,
    request: Request,
    service: RunService = Depends(get_run_service),
) -> RunResponse:
    change = await service.update_result(run_id, req.result_payload)
    publish_event(request, change.event)
    return RunResponse.from_run(change.run)


@router.delete("/{run_id}", response_model=SuccessResponse)
async def delete_run(
    run_id: str,
    request: Request,
    service: RunService = Depends(get_run_service),
) -> SuccessResponse:
    event = await service.delete_run(run_id)
    publish_event(request, event)
    return SuccessResponse(message=f"Run {run_id} deleted")
