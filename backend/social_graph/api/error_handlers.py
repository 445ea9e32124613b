"""Error Handlers — every failure leaves the API as one JSON error envelope.

Invariants:
    - SocialGraphError → its own http_status and to_response() body
    - RequestValidationError (body, path or query shape) → 400 VALIDATION_ERROR
      with one detail per offending field
    - Any other exception → 500 INTERNAL_ERROR; the message never names the store,
      the query or the exception type
    - Client-caused errors (< 500) log at WARNING, server faults at ERROR

Design Decisions:
    - Three handlers registered together: domain, validation, catch-all
    - Handlers are module-level coroutines added with add_exception_handler, so
      they can be exercised without building an app
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from social_graph.core.errors import ErrorCategory, ErrorSeverity, SocialGraphError

logger = logging.getLogger(__name__)


def _envelope(code: str, message: str, category: ErrorCategory,
              severity: ErrorSeverity, **fields) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **fields,
        },
    }


async def handle_domain_error(request: Request, exc: SocialGraphError) -> JSONResponse:
    logger.log(
        logging.ERROR if exc.http_status >= 500 else logging.WARNING,
        f"{exc.code}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "public_id": exc.context.public_id,
            "target_id": exc.context.target_id,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.warning(
        f"Rejected request shape: {[d['field'] for d in details]}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, details=details,
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SocialGraphError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
