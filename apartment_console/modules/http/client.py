"""
Authenticated API client.

Wraps httpx.AsyncClient with bearer authentication and transparent token
refresh. At most one refresh call is in flight at a time: every request
that hits a 401 while a refresh is pending awaits the same task, so all of
them observe the same new token or the same failure.
"""

import asyncio
import logging
import math
from typing import Any, Optional
from urllib.parse import urlsplit

import httpx

from apartment_console.shared.config import Settings, get_settings
from apartment_console.shared.exceptions import ConsoleError
from apartment_console.shared.models import Page, TokenPair, parse_collection
from apartment_console.modules.session.interfaces import ITokenManager

from .exceptions import (
    ApiConnectionError,
    RefreshFailedError,
    RefreshTokenInvalidError,
    SessionExpiredError,
)
from .interfaces import IApiClient
from .responses import extract_error_message, raise_for_api_error, read_json

logger = logging.getLogger(__name__)

REFRESH_PATH = "/token/refresh"
JSON_CONTENT_TYPE = "application/json"


class ApiClient(IApiClient):
    """
    REST API client bound to one session.

    The underlying httpx client keeps a cookie jar, which plays the role of
    the browser's credentials for APIs that also use session cookies.

    Multipart bodies are replayed after a refresh, so pass file contents as
    bytes rather than as streams.
    """

    def __init__(
        self,
        session: ITokenManager,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            session: Token manager providing and receiving tokens
            settings: Settings (defaults to get_settings())
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests
        """
        self._session = session
        self._settings = settings or get_settings()
        self._transport = transport
        self._http: Optional[httpx.AsyncClient] = None
        self._refresh_task: Optional[asyncio.Task] = None

    @property
    def session(self) -> ITokenManager:
        return self._session

    @property
    def base_url(self) -> str:
        return self._settings.api_url.rstrip("/")

    @property
    def refresh_in_progress(self) -> bool:
        return self._refresh_task is not None

    def _get_http(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(
                timeout=self._settings.request_timeout,
                transport=self._transport,
            )
        return self._http

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # URL and header handling

    def resolve_url(self, path: str) -> str:
        """Resolve path against the API base URL; absolute URLs pass through."""
        if path.startswith(("http://", "https://")):
            return path
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url}{path}"

    def resolve_asset_url(self, path: Optional[str]) -> Optional[str]:
        if not path:
            return None
        if path.startswith(("http://", "https://", "data:")):
            return path
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self._settings.resolved_assets_url}{path}"

    @staticmethod
    def _is_refresh_url(url: str) -> bool:
        return urlsplit(url).path.rstrip("/").endswith(REFRESH_PATH)

    @staticmethod
    def _build_headers(
        headers: Optional[dict[str, str]],
        multipart: bool,
        token: Optional[str],
    ) -> dict[str, str]:
        caller_headers = dict(headers or {})
        has_content_type = any(k.lower() == "content-type" for k in caller_headers)

        result: dict[str, str] = {}
        # httpx sets the multipart boundary itself
        if not multipart and not has_content_type:
            result["Content-Type"] = JSON_CONTENT_TYPE
        result.update(caller_headers)
        if token:
            result["Authorization"] = f"Bearer {token}"
        return result

    async def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        *,
        json: Any = None,
        data: Optional[dict[str, Any]] = None,
        files: Any = None,
    ) -> httpx.Response:
        try:
            return await self._get_http().request(
                method,
                url,
                headers=headers,
                json=json,
                data=data,
                files=files,
            )
        except httpx.HTTPError as e:
            raise ApiConnectionError(str(e) or e.__class__.__name__, url) from e

    # Requests

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
        url = self.resolve_url(path)
        multipart = files is not None
        sent_token = self._session.get_token()

        response = await self._send(
            method,
            url,
            self._build_headers(headers, multipart, sent_token),
            json=json,
            data=data,
            files=files,
        )
        if response.status_code != 401:
            return response

        if self._is_refresh_url(url):
            # Never refresh a refresh call
            logger.warning("Refresh endpoint rejected the session, logging out")
            self._session.clear_token()
            raise RefreshTokenInvalidError()

        new_token = await self._token_after_unauthorized(sent_token)
        return await self._send(
            method,
            url,
            self._build_headers(headers, multipart, new_token),
            json=json,
            data=data,
            files=files,
        )

    async def _token_after_unauthorized(self, sent_token: Optional[str]) -> str:
        """
        Token to replay a rejected request with.

        If another request already rotated the token since this one was sent,
        the current token is reused instead of starting a second refresh.
        """
        current = self._session.get_token()
        if current and current != sent_token and self._session.is_token_valid(current):
            return current
        return await self.refresh_session()

    async def get(self, path: str) -> httpx.Response:
        return await self.fetch(path, "GET")

    async def post(self, path: str, data: Any = None, *, files: Any = None) -> httpx.Response:
        if files is not None:
            return await self.fetch(path, "POST", data=data, files=files)
        return await self.fetch(path, "POST", json=data)

    async def put(self, path: str, data: Any = None, *, files: Any = None) -> httpx.Response:
        if files is not None:
            return await self.fetch(path, "PUT", data=data, files=files)
        return await self.fetch(path, "PUT", json=data)

    async def delete(self, path: str) -> httpx.Response:
        return await self.fetch(path, "DELETE")

    async def send_unauthenticated(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
    ) -> httpx.Response:
        url = self.resolve_url(path)
        return await self._send(
            method,
            url,
            self._build_headers(None, False, None),
            json=json,
        )

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
        """Send an authenticated request, raise on error status, decode JSON."""
        method = method.upper()
        if method in ("POST", "PUT", "PATCH"):
            if files is not None:
                response = await self.fetch(path, method, data=data, files=files)
            else:
                response = await self.fetch(path, method, json=data)
        else:
            response = await self.fetch(path, method)
        raise_for_api_error(
            response,
            default_message=default_message,
            not_found_message=not_found_message,
        )
        return read_json(response)

    async def get_collection(self, path: str) -> Page[dict]:
        """
        Fetch every page of a collection endpoint.

        Hydra envelopes are followed page by page (remaining pages fetched
        concurrently); a bare array is returned as the whole collection.
        """
        separator = "&" if "?" in path else "?"
        first = await self.request_json("GET", f"{path}{separator}page=1")
        first_page = parse_collection(first)
        if isinstance(first, list) or not first_page.items:
            return first_page

        per_page = len(first_page.items)
        total_pages = math.ceil(first_page.total_items / per_page)
        if total_pages <= 1:
            return first_page

        rest = await asyncio.gather(
            *(
                self.request_json("GET", f"{path}{separator}page={page}")
                for page in range(2, total_pages + 1)
            )
        )
        items = list(first_page.items)
        for data in rest:
            items.extend(parse_collection(data).items)
        return Page[dict](items=items, total_items=first_page.total_items)

    # Token refresh

    async def refresh_session(self) -> str:
        if self._refresh_task is None:
            self._refresh_task = asyncio.get_running_loop().create_task(self._run_refresh())
        # cancelling one waiter leaves the shared refresh running
        return await asyncio.shield(self._refresh_task)

    async def _run_refresh(self) -> str:
        try:
            pair = await self._request_token_pair()
            persist = self._session.is_persistent
            self._session.set_refresh_token(pair.refresh_token, persist=persist)
            self._session.set_token(pair.token, persist=persist)
            logger.info("Access token refreshed")
            return pair.token
        except SessionExpiredError:
            self._session.clear_token()
            raise
        except ConsoleError as e:
            logger.warning(f"Token refresh failed, logging out: {e.message}")
            self._session.clear_token()
            raise SessionExpiredError() from e
        finally:
            self._refresh_task = None

    async def _request_token_pair(self) -> TokenPair:
        refresh_token = self._session.get_refresh_token()
        body = {"refresh_token": refresh_token} if refresh_token else {}

        response = await self.send_unauthenticated("POST", REFRESH_PATH, json=body)
        if response.status_code == 401:
            logger.warning("Refresh token rejected by the API")
            raise RefreshTokenInvalidError()

        data = read_json(response)
        if not response.is_success:
            raise RefreshFailedError(extract_error_message(data, "Token refresh failed"))

        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            raise RefreshFailedError("No token in refresh response")

        rotated = data.get("refresh_token")
        if not rotated:
            logger.warning("Refresh response carried no new refresh token, dropping the old one")
        return TokenPair(token=token, refresh_token=rotated or None)
