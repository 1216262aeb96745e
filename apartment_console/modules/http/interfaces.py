"""
HTTP module interface.

Feature services depend on IApiClient, not on httpx or the concrete client,
so they can be exercised against a fake API in tests.
"""

from typing import Any, Optional, Protocol, runtime_checkable

import httpx

from apartment_console.shared.models import Page


@runtime_checkable
class IApiClient(Protocol):
    """
    Interface for authenticated access to the REST API.

    Every call attaches the current bearer token. A 401 triggers one shared
    token refresh and a single replay of the request; all other responses
    are returned to the caller as they are.
    """

    async def fetch(
        self,
        path: str,
        method: str = "GET",
        *,
        json: Any = None,
        data: Optional[dict[str, Any]] = None,
        files: Any = None,
        headers: Optional[dict[str, str]] = None,
    ) -> httpx.Response:
        """
        Send an authenticated request.

        Args:
            path: Path relative to the API base URL, or an absolute URL
            method: HTTP method
            json: JSON body
            data: Form fields (sent with files as multipart)
            files: Multipart files
            headers: Extra headers

        Returns:
            The response (any status other than an unrecoverable 401)

        Raises:
            SessionExpiredError: If the token could not be refreshed
            ApiConnectionError: If the API is unreachable
        """
        ...

    async def get(self, path: str) -> httpx.Response:
        ...

    async def post(self, path: str, data: Any = None, *, files: Any = None) -> httpx.Response:
        ...

    async def put(self, path: str, data: Any = None, *, files: Any = None) -> httpx.Response:
        ...

    async def delete(self, path: str) -> httpx.Response:
        ...

    async def send_unauthenticated(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
    ) -> httpx.Response:
        """Send a request without a bearer token and without refresh handling."""
        ...

    async def request_json(
        self,
        method: str,
        path: str,
        data: Any = None,
        *,
        files: Any = None,
        default_message: str = "Request failed",
        not_found_message: Optional[str] = None,
    ) -> Any:
        """
        Send an authenticated request and decode the JSON body.

        Raises:
            ForbiddenError: On 403
            ResourceNotFoundError: On 404
            ApiError: On any other error status
        """
        ...

    async def get_collection(self, path: str) -> Page[dict]:
        """Fetch all items of a collection endpoint (hydra or bare array)."""
        ...

    async def refresh_session(self) -> str:
        """
        Obtain a new access token, sharing one in-flight refresh.

        Returns:
            The new access token

        Raises:
            SessionExpiredError: If the refresh failed (tokens are cleared)
        """
        ...

    def resolve_asset_url(self, path: Optional[str]) -> Optional[str]:
        """Absolute URL of an image asset referenced by relative path."""
        ...
