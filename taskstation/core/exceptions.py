"""Custom exceptions and exception handlers.

This module defines the application's exception hierarchy and registers
global exception handlers for FastAPI.
"""

import logging
from enum import StrEnum
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ErrorCode(StrEnum):
    """Machine-readable error codes for API consumers."""

    # Resource errors
    TASK_NOT_FOUND = "TASK_NOT_FOUND"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Domain rule errors
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"

    # Server errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorDetail(BaseModel):
    """Detail for a single validation error."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Structured error response format."""

    code: str
    message: str
    details: list[ErrorDetail] | None = None
    request_id: str | None = None


class ErrorWrapper(BaseModel):
    """Wrapper for error response."""

    error: ErrorResponse


class AppException(Exception):
    """Base exception for all application errors.

    Attributes:
        code: Machine-readable error code.
        message: Human-readable error message.
        status_code: HTTP status code.
        details: Additional error details.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        *,
        code: ErrorCode | None = None,
        details: list[dict[str, str]] | None = None,
    ) -> None:
        self.message = message
        if code is not None:
            self.code = code
        self.details = details
        super().__init__(message)

    def to_response(self, request_id: str | None = None) -> dict[str, Any]:
        """Convert exception to error response format."""
        error_details = None
        if self.details:
            error_details = [ErrorDetail(**d) for d in self.details]

        return ErrorWrapper(
            error=ErrorResponse(
                code=self.code,
                message=self.message,
                details=error_details,
                request_id=request_id,
            )
        ).model_dump()


class NotFoundError(AppException):
    """Resource not found error."""

    status_code = status.HTTP_404_NOT_FOUND
    code = ErrorCode.RESOURCE_NOT_FOUND

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Any = None,
        *,
        code: ErrorCode | None = None,
    ) -> None:
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(message, code=code)


class ValidationError(AppException):
    """Validation error for invalid input.

    Carries every failed rule in ``details`` rather than only the first one.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    code = ErrorCode.VALIDATION_ERROR

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        """Build a validation error for a single field."""
        return cls(message, details=[{"field": field, "message": message}])

    @property
    def messages(self) -> list[str]:
        """Human-readable messages of all failed rules."""
        if not self.details:
            return [self.message]
        return [d["message"] for d in self.details]


class ConflictError(AppException):
    """Domain rule violation, such as completing an already completed task."""

    status_code = 422
    code = ErrorCode.INVALID_STATUS_TRANSITION


def get_request_id(request: Request) -> str | None:
    """Extract request ID from request state."""
    return getattr(request.state, "request_id", None)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle application-specific exceptions."""
    logger.warning(
        "%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.code
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response(get_request_id(request)),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request parsing errors (missing form fields, wrong types)."""
    details = []
    for error in exc.errors():
        # Extract field name from location tuple
        loc = error.get("loc", ())
        field = ".".join(str(x) for x in loc[1:]) if len(loc) > 1 else str(loc[0])
        details.append({"field": field, "message": error.get("msg", "Invalid value")})

    validation_error = ValidationError(
        message="Request validation failed",
        details=details,
    )
    logger.warning(
        "%s %s rejected: %s", request.method, request.url.path, validation_error.messages
    )

    return JSONResponse(
        status_code=validation_error.status_code,
        content=validation_error.to_response(get_request_id(request)),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        "Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc
    )

    error = AppException(
        message="An unexpected error occurred",
        code=ErrorCode.INTERNAL_ERROR,
    )

    return JSONResponse(
        status_code=error.status_code,
        content=error.to_response(get_request_id(request)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)
