"""Errors raised by the quiz API client."""


class ApiError(Exception):
    """Non-2xx response from the quiz server."""

    def __init__(self, status_code: int, message: str = "Server error"):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class AuthenticationFailed(ApiError):
    """401: missing/invalid token or wrong credentials."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(401, message)


class EmailAlreadyExists(ApiError):
    """409 on registration."""

    def __init__(self, message: str = "Email already exists"):
        super().__init__(409, message)
