# sentinel/backend/api/exceptions.py
"""Domain error -> HTTP response mapping."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sentinel.backend.core.errors import (
    ConflictError,
    NotFoundError,
    SentinelError,
    StateTransitionError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_CODES: dict[type[SentinelError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    StateTransitionError: 409,
    ConflictError: 409,
    StorageError: 503,
}


def status_code_for(exc: SentinelError) -> int:
    for exc_type, code in STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return code
    return 500


async def handle_domain_error(request: Request, exc: SentinelError) -> JSONResponse:
    code = status_code_for(exc)
    if code >= 500:
        logger.error("Request failed: %s %s: %s", request.method, request.url.path, exc)
    body: dict[str, object] = {"detail": str(exc), "error": type(exc).__name__}
    if isinstance(exc, StateTransitionError):
        body["current"] = getattr(exc.current, "value", exc.current)
        body["attempted"] = getattr(exc.attempted, "value", exc.attempted)
    return JSONResponse(status_code=code, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SentinelError, handle_domain_error)
