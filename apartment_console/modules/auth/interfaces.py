"""
Authentication module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from apartment_console.modules.session.models import JWTClaims

from .models import LoginResult


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for logging in and out.

    Tokens obtained here are stored in the shared session, so every API
    client bound to that session is authenticated afterwards.
    """

    async def login(self, username: str, password: str, persist: bool = False) -> LoginResult:
        """
        Exchange credentials for a token pair.

        Args:
            username: Login name
            password: Password
            persist: Keep the session in durable storage ("remember me")

        Raises:
            LoginFailedError: If the credentials are rejected
            FormValidationError: If username or password is missing
        """
        ...

    async def refresh(self) -> LoginResult:
        """
        Rotate the token pair.

        Raises:
            SessionExpiredError: If the session can't be refreshed
        """
        ...

    def logout(self) -> None:
        """Forget both tokens."""
        ...

    def current_claims(self) -> Optional[JWTClaims]:
        ...

    def is_authenticated(self) -> bool:
        """Whether a non-expired access token is held."""
        ...
