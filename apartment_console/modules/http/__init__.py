"""
HTTP module.

Authenticated access to the REST API with single-flight token refresh.

Public API:
- IApiClient: Interface for API access
- ApiClient: httpx-based implementation
- read_json / raise_for_api_error: Response helpers
- HTTP exceptions: ApiError, ForbiddenError, SessionExpiredError, etc.
"""

from .interfaces import IApiClient
from .client import ApiClient, REFRESH_PATH
from .responses import (
    read_json,
    extract_errors,
    extract_error_message,
    raise_for_api_error,
)
from .exceptions import (
    ApiError,
    ApiConnectionError,
    ForbiddenError,
    ResourceNotFoundError,
    UnauthorizedError,
    SessionExpiredError,
    RefreshTokenInvalidError,
    RefreshFailedError,
)

__all__ = [
    # Interface
    "IApiClient",
    # Implementation
    "ApiClient",
    "REFRESH_PATH",
    # Helpers
    "read_json",
    "extract_errors",
    "extract_error_message",
    "raise_for_api_error",
    # Exceptions
    "ApiError",
    "ApiConnectionError",
    "ForbiddenError",
    "ResourceNotFoundError",
    "UnauthorizedError",
    "SessionExpiredError",
    "RefreshTokenInvalidError",
    "RefreshFailedError",
]
