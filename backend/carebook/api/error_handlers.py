"""Error Handlers — map CareBook failures onto HTTP responses.

Invariants:
    - CareBookError → its own http_status (400 / 404 / 409 / 500 / 503) with the
      to_response() body; a failing text command carries its command word
    - Request body or query validation → 400 VALIDATION_ERROR with one entry
      per offending field (never FastAPI's default 422)
    - Anything else → 500 INTERNAL_ERROR with no exception text in the body

Design Decisions:
    - Log level follows the error category: rejected operations (duplicate
      phone, unknown id, nothing pinned) are normal traffic and log at INFO,
      while a corrupt or unwritable data file logs at ERROR
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from carebook.core.errors import CareBookError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)

_LOUD_CATEGORIES = (ErrorCategory.STORAGE, ErrorCategory.INTERNAL)


def log_level_for(exc: CareBookError) -> int:
    return logging.ERROR if exc.category in _LOUD_CATEGORIES else logging.INFO


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_carebook_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_carebook_error_handler(app: FastAPI) -> None:
    """Register CareBook domain/infrastructure error handler."""

    @app.exception_handler(CareBookError)
    async def carebook_error_handler(request: Request, exc: CareBookError):
        """Handle all CareBook domain/infrastructure errors."""
        logger.log(
            log_level_for(exc),
            f"CareBookError: {exc.message}",
            extra={
                "error_code": exc.code, "path": request.url.path,
                "command": exc.context.command,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all. Never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
