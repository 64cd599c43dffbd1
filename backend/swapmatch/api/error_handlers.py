"""Error Handlers: global exception handlers for the swap API.

Invariants:
    - SwapMatchingError -> its own envelope (code, result_code, swap context)
    - RequestValidationError -> 400 VALIDATION_ERROR with per-field details
    - Exception (catch-all) -> 500 INTERNAL_ERROR, never leaks internal details
    - Every envelope carries the swap context of the request (swap_id, caller)

Design Decisions:
    - Log level follows error severity: rejected transitions are warnings, not errors
    - Request context read from the path and X-Caller header, so shell failures
      log with the same swap_id / caller / path extras as registry rejections
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from swapmatch.core.errors import ErrorCategory, ErrorSeverity, SwapMatchingError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(SwapMatchingError, swap_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def request_context(request: Request) -> dict:
    """swap_id from the path (when numeric) and caller from X-Caller."""
    raw_id = request.path_params.get("swap_id")
    return {
        "swap_id": int(raw_id) if str(raw_id).isdigit() else None,
        "caller": request.headers.get("x-caller"),
    }


async def swap_error_handler(request: Request, exc: SwapMatchingError):
    level = (
        logging.WARNING
        if exc.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING)
        else logging.ERROR
    )
    logger.log(
        level,
        f"Swap rejected: {exc.message}",
        extra={
            "error_code": exc.code,
            "swap_id": exc.context.swap_id,
            "caller": exc.context.caller,
            "path": request.url.path,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    context = request_context(request)
    details = [
        {"field": ".".join(str(loc) for loc in e["loc"]), "message": e["msg"]}
        for e in exc.errors()
    ]
    logger.warning(
        f"Malformed request: {', '.join(d['field'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path, **context},
    )
    return _envelope(
        status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", "Invalid request data",
        ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, details=details,
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    context = request_context(request)
    logger.error(
        f"Unhandled {type(exc).__name__}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path, **context},
    )
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR",
        "An unexpected error occurred",
        ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL, context,
    )


def _envelope(
    status_code: int,
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    context: dict,
    **extra,
) -> JSONResponse:
    """Shell-level errors share the domain envelope shape, minus result_code."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "category": category.value,
                "severity": severity.value,
                "context": context,
                **extra,
            },
        },
    )
