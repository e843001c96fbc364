"""Boundary mapper from failures to HTTP responses.

This is the only module that decides which HTTP status a failure gets.
Domain code raises ``AppException`` tagged with a ``FailureKind``; the
handlers below translate it into the unified error body::

    {"status": "error", "statusCode": 400, "type": "...", "message": "...",
     "details": [...]}
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from accounts.core.exceptions import (
    AppException,
    FailureKind,
    validation_failure,
)
from accounts.core.validation import violations_from_errors
from accounts.models.error import ErrorDetail, ErrorResponse

logger = logging.getLogger("accounts.exception")

STATUS_BY_KIND: dict[FailureKind, int] = {
    FailureKind.validation: 400,
    FailureKind.conflict: 400,
    FailureKind.not_found: 404,
    FailureKind.persistence: 500,
    FailureKind.unexpected: 500,
}


def status_for(kind: FailureKind) -> int:
    return STATUS_BY_KIND[kind]


def render_error(
    status_code: int,
    error_type: str,
    message: str,
    details: list[ErrorDetail] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        status_code=status_code, type=error_type, message=message, details=details
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


def render_failure(exc: AppException) -> JSONResponse:
    """Render a tagged failure as an HTTP response."""
    status_code = status_for(exc.kind)
    details = None
    if exc.kind is FailureKind.validation:
        details = [ErrorDetail(**v.as_dict()) for v in exc.details]
    return render_error(status_code, exc.error_type, exc.message, details)


def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle every AppException."""
    status_code = status_for(exc.kind)
    extra = {
        "method": request.method,
        "path": request.url.path,
        "status_code": status_code,
        "error_type": exc.error_type,
        "failure_kind": exc.kind.value,
    }
    if status_code >= 500:
        logger.error(
            "AppException: %s - %s",
            exc.error_type,
            exc.message,
            extra=extra,
            exc_info=exc.__cause__ is not None,
        )
    else:
        logger.info("AppException: %s - %s", exc.error_type, exc.message, extra=extra)
    return render_failure(exc)


def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Convert request parsing errors into a validation failure."""
    return app_exception_handler(
        request, validation_failure(violations_from_errors(exc.errors()))
    )


def http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle framework HTTP errors (unknown routes, wrong methods)."""
    response = render_error(exc.status_code, "http_error", str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler; the client only sees a sanitised message."""
    logger.error(
        "Unhandled exception: %s %s - %s",
        request.method,
        request.url.path,
        exc,
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": 500,
            "failure_kind": FailureKind.unexpected.value,
        },
        exc_info=True,
    )
    return render_failure(AppException(FailureKind.unexpected))


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
