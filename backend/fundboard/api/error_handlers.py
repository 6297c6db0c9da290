"""Error Handlers — map every failure to the Fundboard error envelope.

Invariants:
    - FundboardError -> its own http_status and to_response() envelope,
      with the caller's client id filled into the context when missing
    - RequestValidationError -> 400 VALIDATION_ERROR; details use the same
      {field, message, type} entries as ItemValidationError, where field is the
      dotted location inside the body/query/path and location names which one
    - Exception (catch-all) -> 500 that never leaks internal details
    - Log level follows status: warning below 500, error at 500 and above

Design Decisions:
    - Kept out of main.py so the app module only wires things together
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fundboard.core.domain_types import DEFAULT_CLIENT_ID
from fundboard.core.errors import (
    ErrorCategory, ErrorSeverity, FundboardError, error_detail,
)

logger = logging.getLogger(__name__)

_LOCATIONS = ("body", "query", "path", "header")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FundboardError, _fundboard_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(Exception, _unexpected_error)


def _client_id(request: Request) -> str:
    return (request.headers.get("x-client-id") or "").strip() or DEFAULT_CLIENT_ID


def _log_extra(request: Request, code: str) -> dict:
    return {
        "client_id": _client_id(request),
        "error_code": code,
        "path": request.url.path,
    }


async def _fundboard_error(request: Request, exc: FundboardError) -> JSONResponse:
    if exc.context.client_id is None:
        exc.context.client_id = _client_id(request)
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{type(exc).__name__}: {exc.message}",
        extra={
            **_log_extra(request, exc.code),
            "shop": exc.context.shop,
            "item_id": exc.context.item_id,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [_validation_detail(e) for e in exc.errors()]
    logger.warning(
        f"Invalid request: {', '.join(d['field'] for d in details)}",
        extra=_log_extra(request, "VALIDATION_ERROR"),
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.ERROR.value,
                "details": details,
            },
        },
    )


def _validation_detail(error: dict) -> dict[str, str]:
    loc = [str(part) for part in error.get("loc", ())]
    location = loc[0] if loc and loc[0] in _LOCATIONS else None
    field = ".".join(loc[1:] if location else loc) or (location or "")
    detail = error_detail(field, error.get("msg", ""), error.get("type", ""))
    if location:
        detail["location"] = location
    return detail


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
        extra=_log_extra(request, "INTERNAL_ERROR"),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )
