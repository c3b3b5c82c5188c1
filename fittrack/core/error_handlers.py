"""Global exception handlers for the FastAPI application."""

import logging
from typing import Any, Sequence

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from fittrack.core.exceptions import FitTrackException

logger = logging.getLogger(__name__)


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build the error envelope shared by every handler."""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": message,
            "error": {
                "code": code,
                "details": details or {},
            },
        },
    )


def _field_errors(errors: Sequence[dict]) -> list[dict[str, str]]:
    result = []
    for error in errors:
        # Drop the "body"/"query" prefix FastAPI adds to request locations
        loc = [str(part) for part in error["loc"] if part not in ("body", "query", "path")]
        result.append({"field": ".".join(loc), "message": error["msg"]})
    return result


async def fittrack_exception_handler(request: Request, exc: FitTrackException) -> JSONResponse:
    """Handle all FitTrackException subclasses."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "FitTrackException: %s - %s",
        exc.code,
        exc.message,
        extra={
            "error_code": exc.code,
            "status_code": exc.status_code,
            "details": exc.details,
            "path": request.url.path,
            "method": request.method,
        },
    )
    return error_response(exc.status_code, exc.code, exc.message, exc.details)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request body/query validation failures raised by FastAPI."""
    errors = _field_errors(exc.errors())
    logger.warning(
        "Request validation error: %s",
        errors,
        extra={"path": request.url.path, "method": request.method},
    )
    return error_response(400, "VALIDATION_ERROR", "Validation error", {"errors": errors})


async def pydantic_validation_handler(
    request: Request, exc: PydanticValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors raised outside request parsing."""
    errors = _field_errors(exc.errors())
    logger.warning(
        "Validation error: %s",
        errors,
        extra={"path": request.url.path, "method": request.method},
    )
    return error_response(400, "VALIDATION_ERROR", "Validation error", {"errors": errors})


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(
        "Unhandled exception: %s",
        str(exc),
        extra={"path": request.url.path, "method": request.method},
    )
    return error_response(500, "INTERNAL_ERROR", "An unexpected error occurred")
