"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
JWT minting, settings pointing at a fake API, and a FakeApi that serves
requests made through httpx.MockTransport.
"""

import inspect
import json
from datetime import datetime, timezone, timedelta
from typing import Any, Callable, Optional

import httpx
import jwt  # PyJWT
import pytest

from apartment_console.container import reset_container
from apartment_console.shared.config import Settings, get_settings
from apartment_console.modules.session.service import TokenManager, reset_token_manager
from apartment_console.modules.session.storage import MemoryTokenStorage


# Test JWT secret (the client never verifies signatures)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"
TEST_API_URL = "http://api.test/api"


def create_test_token(
    username: str = "alice",
    roles: Optional[list[str]] = None,
    expired: bool = False,
    expires_in: int = 3600,
    **claims: Any,
) -> str:
    """
    Create a test JWT token.

    Args:
        username: Username claim
        roles: Role list (defaults to ["ROLE_USER"])
        expired: If True, the token expired an hour ago
        expires_in: Lifetime in seconds for non-expired tokens
        **claims: Extra claims

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(seconds=expires_in)

    payload = {
        "sub": username,
        "username": username,
        "roles": roles if roles is not None else ["ROLE_USER"],
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
        **claims,
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


Handler = Callable[[httpx.Request], Any]


class FakeApi:
    """
    In-process stand-in for the REST API.

    Handlers are registered per (method, path) and may be sync or async;
    every request is recorded for assertions.
    """

    def __init__(self, prefix: str = "/api"):
        self.prefix = prefix
        self.routes: dict[tuple[str, str], Handler] = {}
        self.requests: list[httpx.Request] = []

    def route(
        self,
        method: str,
        path: str,
        handler: Optional[Handler] = None,
        *,
        status: int = 200,
        json: Any = None,
    ) -> None:
        if handler is None:
            def handler(request: httpx.Request, _status=status, _body=json) -> httpx.Response:
                return httpx.Response(_status, json=_body)
        self.routes[(method.upper(), f"{self.prefix}{path}")] = handler

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"error": f"No route for {request.method} {request.url.path}"})
        result = handler(request)
        if inspect.isawaitable(result):
            result = await result
        return result

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        full_path = f"{self.prefix}{path}"
        return [r for r in self.requests if r.method == method.upper() and r.url.path == full_path]


def request_json(request: httpx.Request) -> Any:
    """Decode the JSON body of a recorded request."""
    return json.loads(request.content or b"null")


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset module singletons and cached settings around each test."""
    reset_token_manager()
    reset_container()
    get_settings.cache_clear()
    yield
    reset_token_manager()
    reset_container()
    get_settings.cache_clear()


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Factory for test JWTs."""
    return create_test_token


@pytest.fixture
def read_body() -> Callable[[httpx.Request], Any]:
    """Decode the JSON body of a recorded request."""
    return request_json


@pytest.fixture
def test_settings() -> Settings:
    """Settings pointing at the fake API, without durable token storage."""
    return Settings(
        _env_file=None,
        api_url=TEST_API_URL,
        assets_url="http://assets.test",
        token_storage_path="",
    )


@pytest.fixture
def memory_storage() -> MemoryTokenStorage:
    return MemoryTokenStorage()


@pytest.fixture
def session(memory_storage: MemoryTokenStorage) -> TokenManager:
    """Token manager backed by in-memory durable storage."""
    return TokenManager(storage=memory_storage)


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def api_client(session: TokenManager, test_settings: Settings, fake_api: FakeApi):
    """ApiClient wired to the fake API."""
    from apartment_console.modules.http.client import ApiClient

    return ApiClient(session, settings=test_settings, transport=fake_api.transport)
