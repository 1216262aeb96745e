"""
Authentication service.

Logs in against POST /login, delegates refresh to the API client's
single-flight refresh and clears the session on logout.
"""

import logging
from typing import Optional

from apartment_console.shared.exceptions import FormValidationError
from apartment_console.modules.http.interfaces import IApiClient
from apartment_console.modules.http.responses import extract_error_message, read_json
from apartment_console.modules.session.interfaces import ITokenManager
from apartment_console.modules.session.models import JWTClaims
from apartment_console.modules.users.validation import MIN_PASSWORD_LENGTH

from .exceptions import LoginFailedError
from .interfaces import IAuthService
from .models import LoginResult

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"


def validate_credentials(username: str, password: str) -> None:
    """
    Check login form input before calling the API.

    Raises:
        FormValidationError: With one message per invalid field
    """
    errors: dict[str, str] = {}
    if not (username or "").strip():
        errors["username"] = "Username is required"
    if not password:
        errors["password"] = "Password is required"
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    if errors:
        raise FormValidationError(errors)


class AuthService(IAuthService):
    """Implementation of IAuthService on top of the API client and session."""

    def __init__(self, client: IApiClient, session: ITokenManager):
        self._client = client
        self._session = session

    async def login(self, username: str, password: str, persist: bool = False) -> LoginResult:
        validate_credentials(username, password)
        username = username.strip()

        response = await self._client.send_unauthenticated(
            "POST",
            LOGIN_PATH,
            json={"username": username, "password": password},
        )
        data = read_json(response)
        if not response.is_success:
            logger.info(f"Login rejected for {username} ({response.status_code})")
            raise LoginFailedError(extract_error_message(data, "Login failed"))

        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            raise LoginFailedError("No token in login response")

        refresh_token = data.get("refresh_token")
        if refresh_token:
            self._session.set_refresh_token(refresh_token, persist=persist)
        self._session.set_token(token, persist=persist)

        logger.info(f"Logged in as {username}")
        return LoginResult(token=token, claims=self._session.parse_jwt(token))

    async def refresh(self) -> LoginResult:
        token = await self._client.refresh_session()
        return LoginResult(token=token, claims=self._session.parse_jwt(token))

    def logout(self) -> None:
        self._session.clear_token()
        logger.info("Logged out")

    def current_claims(self) -> Optional[JWTClaims]:
        return self._session.parse_jwt(self._session.get_token())

    def is_authenticated(self) -> bool:
        return self._session.is_token_valid(self._session.get_token())
