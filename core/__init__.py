"""Core module - logging, errors and authentication shared by the service."""

from .exceptions import (
    AuthError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    QuizServiceError,
    StorageError,
    UpstreamError,
    ValidationError,
)
from .logger import configure_logging, get_logger

__all__ = [
    # Errors
    "QuizServiceError",
    "ValidationError",
    "AuthError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "UpstreamError",
    "StorageError",
    # Logging
    "configure_logging",
    "get_logger",
]
