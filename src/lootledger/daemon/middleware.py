"""HTTP middleware for request correlation and structured errors."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from pydantic import ValidationError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from lootledger.config.constants import REQUEST_ID_HEADER
from lootledger.core.errors import ErrorCategory, ErrorCode, LootLedgerError
from lootledger.core.logging import clear_request_id, set_request_id

log = structlog.get_logger(__name__)

# Type alias for the call_next function
CallNext = Callable[[Request], Awaitable[Response]]

HTTP_STATUS: dict[ErrorCategory, int] = {
    ErrorCategory.NOT_FOUND: 404,
    ErrorCategory.CONFIG: 500,
    ErrorCategory.INVALID_INPUT: 400,
    ErrorCategory.CONFLICT: 409,
    ErrorCategory.NO_MATCHING_ITEM: 422,
    ErrorCategory.UPSTREAM_FAILURE: 502,
    ErrorCategory.INTERNAL: 500,
}


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind a request id to the logging context and echo it back."""

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        start = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            clear_request_id()
        response.headers[REQUEST_ID_HEADER] = request_id
        log.debug(
            "http_request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            request_id=request_id,
            duration_ms=round((time.perf_counter() - start) * 1000, 1),
        )
        return response


async def handle_lootledger_error(request: Request, exc: Exception) -> Response:
    """Render a LootLedgerError with its category's HTTP status."""
    assert isinstance(exc, LootLedgerError)
    status = HTTP_STATUS[exc.category]
    log_fn = log.error if status >= 500 else log.info
    log_fn("request_failed", path=request.url.path, error=exc.error_name, status=status)
    return JSONResponse(exc.to_dict(), status_code=status)


async def handle_validation_error(request: Request, exc: Exception) -> Response:
    """Render pydantic body validation failures as INVALID_INPUT."""
    assert isinstance(exc, ValidationError)
    errors = [
        {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]
    log.info("request_invalid", path=request.url.path, errors=len(errors))
    return JSONResponse(
        {
            "code": ErrorCode.INVALID_VALUE.value,
            "error": ErrorCode.INVALID_VALUE.name,
            "category": ErrorCategory.INVALID_INPUT.value,
            "message": "Request body failed validation",
            "retryable": False,
            "details": {"errors": errors},
        },
        status_code=400,
    )
