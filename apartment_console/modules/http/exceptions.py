"""
HTTP module exceptions.

Raised by the API client and the response helpers so that callers can
react to authorization problems, missing resources and API failures
without inspecting status codes themselves.
"""

from typing import Optional

from apartment_console.shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    NotFoundError,
)


API_SERVICE = "api"


class ApiError(ExternalServiceError):
    """Raised when the API answers with an unexpected error status."""

    def __init__(
        self,
        status_code: int,
        message: str = "Request failed",
        errors: Optional[list[str]] = None,
    ):
        super().__init__(
            message,
            service=API_SERVICE,
            code="API_ERROR",
            details={"status_code": status_code, "errors": errors or []},
        )
        self.status_code = status_code
        self.errors = errors or []


class ApiConnectionError(ExternalServiceError):
    """Raised when the API cannot be reached at all."""

    def __init__(self, message: str, url: str = ""):
        super().__init__(
            f"Cannot reach API: {message}",
            service=API_SERVICE,
            code="API_UNREACHABLE",
            details={"url": url},
        )


class ForbiddenError(AuthorizationError):
    """Raised on 403: the session is valid but not allowed to do this."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(message, code="FORBIDDEN")


class ResourceNotFoundError(NotFoundError):
    """Raised on 404."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, code="NOT_FOUND")


class UnauthorizedError(AuthenticationError):
    """Raised when a request is still rejected after the token was refreshed."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="UNAUTHORIZED")


class SessionExpiredError(AuthenticationError):
    """Raised when the session could not be refreshed; tokens were cleared."""

    def __init__(self, message: str = "Session expired, please log in again"):
        super().__init__(message, code="SESSION_EXPIRED")


class RefreshTokenInvalidError(SessionExpiredError):
    """Raised when the refresh endpoint itself rejects the refresh token."""

    def __init__(self, message: str = "Refresh token is invalid"):
        super().__init__(message)
        self.code = "REFRESH_TOKEN_INVALID"


class RefreshFailedError(AuthenticationError):
    """Raised when the refresh call fails for a reason other than 401."""

    def __init__(self, message: str = "Token refresh failed"):
        super().__init__(message, code="REFRESH_FAILED")
