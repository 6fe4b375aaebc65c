"""Python client for the PDF quiz API."""

from .api_client import QuizApiClient
from .cache import QuizCache
from .errors import ApiError, AuthenticationFailed, EmailAlreadyExists

__all__ = [
    "QuizApiClient",
    "QuizCache",
    "ApiError",
    "AuthenticationFailed",
    "EmailAlreadyExists",
]
