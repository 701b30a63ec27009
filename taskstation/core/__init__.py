"""Core module exports."""

from taskstation.core.exceptions import (
    AppException,
    ConflictError,
    ErrorCode,
    NotFoundError,
    ValidationError,
)
from taskstation.core.logging import setup_logging

__all__ = [
    "AppException",
    "ConflictError",
    "ErrorCode",
    "NotFoundError",
    "ValidationError",
    "setup_logging",
]
