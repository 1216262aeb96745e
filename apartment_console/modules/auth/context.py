"""
Authentication state holders.

AuthContext tracks the identity decoded from the current access token and
follows every token change published by the session. UserContext adds the
full profile fetched from GET /me and drops it whenever the identity
behind the token changes.
"""

import logging
from typing import Optional

from apartment_console.shared.exceptions import ConsoleError
from apartment_console.shared.models import User
from apartment_console.modules.roles import is_admin
from apartment_console.modules.session.interfaces import ITokenManager
from apartment_console.modules.session.models import JWTClaims
from apartment_console.modules.users.interfaces import IUserService

from .interfaces import IAuthService

logger = logging.getLogger(__name__)


class AuthContext:
    """Identity of the current session, kept in sync with the token."""

    def __init__(self, auth: IAuthService, session: ITokenManager):
        self._auth = auth
        self._session = session
        self._user: Optional[JWTClaims] = session.parse_jwt(session.get_token())
        self._loading = True
        self._unsubscribe = session.subscribe(self._on_token_changed)

    def _on_token_changed(self, token: Optional[str]) -> None:
        self._user = self._session.parse_jwt(token) if token else None

    @property
    def session(self) -> ITokenManager:
        return self._session

    @property
    def user(self) -> Optional[JWTClaims]:
        return self._user

    @property
    def loading(self) -> bool:
        """True until initialize() has finished."""
        return self._loading

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    async def initialize(self, force_refresh: bool = True) -> Optional[JWTClaims]:
        """
        Restore the session at start-up.

        With force_refresh the token pair is always rotated, otherwise only
        when the stored access token is missing or expired. Any failure logs
        the session out.
        """
        try:
            token = self._session.get_token()
            if force_refresh or not self._session.is_token_valid(token):
                if force_refresh or self._session.get_refresh_token():
                    result = await self._auth.refresh()
                    self._user = result.claims
                elif token:
                    logger.info("Stored access token expired and no refresh token is available")
                    self._auth.logout()
        except ConsoleError as e:
            logger.info(f"Could not restore session: {e.message}")
            self._auth.logout()
            self._user = None
        finally:
            self._loading = False
        return self._user

    async def login(self, username: str, password: str, persist: bool = False) -> Optional[JWTClaims]:
        result = await self._auth.login(username, password, persist=persist)
        self._user = result.claims
        return self._user

    def logout(self) -> None:
        self._auth.logout()
        self._user = None

    def close(self) -> None:
        """Stop following session changes."""
        self._unsubscribe()


class UserContext:
    """AuthContext plus the full profile of the logged-in user."""

    def __init__(self, auth_context: AuthContext, users: IUserService):
        self._auth = auth_context
        self._users = users
        self._full_user: Optional[User] = None
        self._profile_identity: Optional[str] = None
        self._loading_user = False
        self._unsubscribe = auth_context.session.subscribe(self._on_token_changed)

    def _on_token_changed(self, token: Optional[str]) -> None:
        claims = self._auth.session.parse_jwt(token) if token else None
        identity = claims.identity if claims else None
        if identity is None or identity != self._profile_identity:
            self._full_user = None
            self._profile_identity = None

    @property
    def auth_user(self) -> Optional[JWTClaims]:
        return self._auth.user

    @property
    def full_user(self) -> Optional[User]:
        return self._full_user

    @property
    def loading(self) -> bool:
        return self._auth.loading

    @property
    def loading_user(self) -> bool:
        return self._loading_user

    @property
    def is_authenticated(self) -> bool:
        return self._auth.is_authenticated

    @property
    def is_admin(self) -> bool:
        """Admin check on the fetched profile, falling back to token roles."""
        if self._full_user is not None:
            return is_admin(self._full_user.roles)
        if self._auth.user is not None:
            return is_admin(self._auth.user.roles)
        return False

    async def refresh_user(self) -> Optional[User]:
        """Fetch the profile of the current identity; None when logged out or on failure."""
        claims = self._auth.user
        if claims is None:
            self._full_user = None
            self._profile_identity = None
            return None

        self._loading_user = True
        try:
            self._full_user = await self._users.get_current_user()
            self._profile_identity = claims.identity
        except ConsoleError as e:
            logger.warning(f"Failed to fetch user profile: {e.message}")
            self._full_user = None
            self._profile_identity = None
        finally:
            self._loading_user = False
        return self._full_user

    async def ensure_user(self) -> Optional[User]:
        """Return the cached profile, fetching it if the identity changed."""
        if self._full_user is None and self._auth.user is not None:
            return await self.refresh_user()
        return self._full_user

    async def login(self, username: str, password: str, persist: bool = False) -> Optional[JWTClaims]:
        """Log in, then load the profile."""
        claims = await self._auth.login(username, password, persist=persist)
        await self.refresh_user()
        return claims

    def logout(self) -> None:
        self._auth.logout()
        self._full_user = None
        self._profile_identity = None

    def close(self) -> None:
        self._unsubscribe()
