"""Error Handlers — every failure leaves the API as one JSON envelope.

Invariants:
    - CatsApiError → its own http_status (404 CAT_NOT_FOUND, 400 CAT_INVALID)
    - RequestValidationError → 400 VALIDATION_ERROR, one detail per bad field
    - Any other exception → 500 INTERNAL_ERROR without internal details
    - Body shape is always {"error": {"code", "message", "category", "severity", ...}}

Design Decisions:
    - Handlers live here so create_app() only wires
    - Detail "field" is the wire name (birthDate, not body.birthDate); the
      request part it came from goes in "location"
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cats_api.core.errors import (
    CatsApiError, ErrorCategory, ErrorSeverity,
)

logger = logging.getLogger(__name__)

_REQUEST_PARTS = {"body", "path", "query", "header", "cookie"}


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain, validation and catch-all handlers on `app`."""

    @app.exception_handler(CatsApiError)
    async def cats_error_handler(request: Request, exc: CatsApiError):
        logger.warning(
            f"{request.method} {request.url.path} rejected: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "cat_id": exc.context.cat_id,
            },
        )
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError,
    ):
        details = [_field_detail(e) for e in exc.errors()]
        logger.warning(
            f"Invalid request to {request.url.path}: "
            + ", ".join(d["field"] or d["location"] for d in details),
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_envelope(
                "VALIDATION_ERROR", "Invalid request data",
                ErrorCategory.VALIDATION, details=details,
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled {type(exc).__name__} on {request.url.path}",
            exc_info=exc,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_envelope(
                "INTERNAL_ERROR", "An unexpected error occurred",
                ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
            ),
        )


def error_envelope(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity = ErrorSeverity.ERROR,
    **extra: Any,
) -> dict:
    """Error body for failures raised outside the CatsApiError hierarchy."""
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **extra,
        },
    }


def _field_detail(error: dict) -> dict[str, str]:
    loc = [str(part) for part in error.get("loc", ())]
    location = loc.pop(0) if loc and loc[0] in _REQUEST_PARTS else ""
    return {
        "field": ".".join(loc),
        "location": location,
        "message": error["msg"],
        "type": error["type"],
    }
