"""Error Handlers — map every failure to the one JSON error envelope.

Invariants:
    - FeedlineError → its own http_status and to_response() body
    - RequestValidationError (malformed JSON body, bad path UUID) → 400 VALIDATION_ERROR
      with per-field details
    - Starlette HTTPException (unknown route, wrong method) → same envelope, same status
    - Any other exception → 500 INTERNAL_ERROR with no internal details
    - 4xx logged at WARNING, 5xx at ERROR with traceback

Design Decisions:
    - Pagination errors never reach the validation handler: limit/offset/max_id
      are raw strings validated in core/page_request.py and raised as FeedlineError
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from feedline.core.errors import ErrorCategory, ErrorSeverity, FeedlineError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(FeedlineError, _feedline_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unhandled_error)


async def _feedline_error(request: Request, exc: FeedlineError) -> JSONResponse:
    extra = {
        "error_code": exc.code,
        "path": request.url.path,
        "viewer_id": exc.context.viewer_id,
    }
    if exc.is_client_error:
        logger.warning(f"{exc.code}: {exc.message}", extra=extra)
    else:
        logger.error(
            f"{exc.code}: {exc.message}", extra=extra,
            exc_info=exc.__cause__ is not None,
        )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _request_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Request validation failed: {len(details)} field(s)",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return _envelope(
        status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", "Invalid request data",
        ErrorCategory.VALIDATION, ErrorSeverity.WARNING, details=details,
    )


async def _http_error(
    request: Request, exc: StarletteHTTPException,
) -> JSONResponse:
    code = "RESOURCE_NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR"
    category = (
        ErrorCategory.RESOURCE_NOT_FOUND if exc.status_code == 404
        else ErrorCategory.VALIDATION
    )
    logger.warning(
        f"HTTP {exc.status_code} on {request.url.path}",
        extra={"error_code": code, "path": request.url.path},
    )
    return _envelope(
        exc.status_code, code, str(exc.detail), category, ErrorSeverity.WARNING,
    )


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception: {exc}",
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        exc_info=True,
    )
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR",
        "An unexpected error occurred",
        ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
    )


def _envelope(
    status_code: int, code: str, message: str,
    category: ErrorCategory, severity: ErrorSeverity, **fields,
) -> JSONResponse:
    body = {
        "code": code,
        "message": message,
        "category": category.value,
        "severity": severity.value,
        **fields,
    }
    return JSONResponse(status_code=status_code, content={"error": body})
