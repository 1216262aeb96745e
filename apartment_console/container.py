"""
Service wiring.

The container owns the one session (token manager) of the process and
injects it into the API client and every service built on it, so all of
them see the same tokens. Services are created lazily on first access.
"""

from typing import TYPE_CHECKING, Optional

import httpx

from apartment_console.shared.config import Settings, get_settings
from apartment_console.modules.session.interfaces import ITokenManager
from apartment_console.modules.session.service import create_token_manager

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from apartment_console.modules.http.client import ApiClient
    from apartment_console.modules.auth.interfaces import IAuthService
    from apartment_console.modules.auth.context import AuthContext, UserContext
    from apartment_console.modules.auth.password_reset import PasswordResetService
    from apartment_console.modules.apartments.interfaces import IApartmentService
    from apartment_console.modules.users.interfaces import IUserService
    from apartment_console.modules.shares.interfaces import IShareService


class ServiceContainer:
    """
    Container for the session, the API client and all services.

    All services are cached within the container. Use reset() to drop
    them (the session survives a reset).
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[ITokenManager] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._session = session or create_token_manager(self._settings)
        self._transport = transport
        self._client: "ApiClient | None" = None
        self._auth_service: "IAuthService | None" = None
        self._auth_context: "AuthContext | None" = None
        self._user_context: "UserContext | None" = None
        self._password_reset: "PasswordResetService | None" = None
        self._apartment_service: "IApartmentService | None" = None
        self._user_service: "IUserService | None" = None
        self._share_service: "IShareService | None" = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def session(self) -> ITokenManager:
        return self._session

    @property
    def client(self) -> "ApiClient":
        """Get the API client bound to the session."""
        if self._client is None:
            from apartment_console.modules.http.client import ApiClient
            self._client = ApiClient(self._session, settings=self._settings, transport=self._transport)
        return self._client

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from apartment_console.modules.auth.service import AuthService
            self._auth_service = AuthService(self.client, self._session)
        return self._auth_service

    @property
    def auth_context(self) -> "AuthContext":
        if self._auth_context is None:
            from apartment_console.modules.auth.context import AuthContext
            self._auth_context = AuthContext(self.auth, self._session)
        return self._auth_context

    @property
    def user_context(self) -> "UserContext":
        if self._user_context is None:
            from apartment_console.modules.auth.context import UserContext
            self._user_context = UserContext(self.auth_context, self.users)
        return self._user_context

    @property
    def password_reset(self) -> "PasswordResetService":
        if self._password_reset is None:
            from apartment_console.modules.auth.password_reset import PasswordResetService
            self._password_reset = PasswordResetService(self.client)
        return self._password_reset

    @property
    def shares(self) -> "IShareService":
        """Get the share service instance."""
        if self._share_service is None:
            from apartment_console.modules.shares.service import ShareService
            self._share_service = ShareService(self.client)
        return self._share_service

    @property
    def apartments(self) -> "IApartmentService":
        """Get the apartment service instance."""
        if self._apartment_service is None:
            from apartment_console.modules.apartments.service import ApartmentService
            self._apartment_service = ApartmentService(self.client, shares=self.shares)
        return self._apartment_service

    @property
    def users(self) -> "IUserService":
        """Get the user service instance."""
        if self._user_service is None:
            from apartment_console.modules.users.service import UserService
            self._user_service = UserService(self.client)
        return self._user_service

    def reset(self) -> None:
        """
        Reset all cached services.

        Contexts stop following the session before they are dropped.
        """
        if self._user_context is not None:
            self._user_context.close()
        if self._auth_context is not None:
            self._auth_context.close()
        self._client = None
        self._auth_service = None
        self._auth_context = None
        self._user_context = None
        self._password_reset = None
        self._apartment_service = None
        self._user_service = None
        self._share_service = None

    async def aclose(self) -> None:
        """Close the HTTP client and reset the container."""
        if self._client is not None:
            await self._client.aclose()
        self.reset()


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container with a new
    session. Primarily used for testing.
    """
    global _container
    _container = None
