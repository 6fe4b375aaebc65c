"""Error taxonomy of the quiz service.

Every error carries a human readable ``message`` (returned to the caller as
``{"error": message}``) plus optional ``details`` that are only logged.
"""

from typing import Any, Optional


class QuizServiceError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str = "Server error", details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message}


class ValidationError(QuizServiceError):
    """Missing or malformed input."""

    status_code = 400


class AuthError(QuizServiceError):
    """Missing/invalid token or bad credentials."""

    status_code = 401

    def __init__(self, message: str = "Authentication required", details: Optional[dict[str, Any]] = None):
        super().__init__(message, details)


class AuthorizationError(QuizServiceError):
    """Acting user is not the owner of the resource."""

    status_code = 403


class NotFoundError(QuizServiceError):
    status_code = 404


class ConflictError(QuizServiceError):
    status_code = 409


class UpstreamError(QuizServiceError):
    """Oracle or text extraction failure, including malformed oracle output."""

    status_code = 500


class StorageError(QuizServiceError):
    """Document store failure."""

    status_code = 500
