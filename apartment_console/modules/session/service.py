"""
Session token manager.

Holds the access and refresh tokens for the lifetime of the process,
optionally mirrored to durable storage ("remember me"), and broadcasts
every change to subscribers.
"""

import asyncio
import logging
import time
from typing import Callable, Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from apartment_console.shared.config import Settings, get_settings

from .exceptions import TokenStorageError
from .interfaces import ITokenManager, ITokenStorage, TokenListener
from .models import JWTClaims
from .notifier import TokenChangeNotifier
from .storage import FileTokenStorage, REFRESH_TOKEN_KEY, TOKEN_KEY

logger = logging.getLogger(__name__)

DEFAULT_EXPIRY_MARGIN = 10  # seconds

# Claims are only read here; the API checks signature, expiry and claim types
DECODE_OPTIONS = {
    "verify_signature": False,
    "verify_exp": False,
    "verify_nbf": False,
    "verify_iat": False,
    "verify_aud": False,
    "verify_iss": False,
    "verify_sub": False,
    "verify_jti": False,
}


def parse_jwt(token: Optional[str]) -> Optional[JWTClaims]:
    """
    Decode the payload segment of a JWT without verifying its signature.

    The signature can only be checked by the API; the client only needs the
    claims. Returns None for anything that is not a decodable three-part
    token with a JSON object payload.
    """
    if not token or not isinstance(token, str):
        return None
    try:
        payload = jwt.decode(token, options=DECODE_OPTIONS)
    except jwt.PyJWTError:
        return None
    try:
        return JWTClaims(**payload)
    except (PydanticValidationError, TypeError):
        return None


def is_token_valid(
    token: Optional[str],
    margin: int = DEFAULT_EXPIRY_MARGIN,
    now: Optional[float] = None,
) -> bool:
    """A token is valid only if it expires more than margin seconds from now."""
    claims = parse_jwt(token)
    if claims is None or claims.exp is None:
        return False
    current = time.time() if now is None else now
    return claims.exp > current + margin


class TokenManager(ITokenManager):
    """
    Implementation of the session token manager.

    Memory is authoritative for the running process. Durable storage is
    written only when the caller asks for persistence and is read lazily
    when memory is empty (e.g. after a restart).
    """

    def __init__(
        self,
        storage: Optional[ITokenStorage] = None,
        notifier: Optional[TokenChangeNotifier] = None,
        expiry_margin: int = DEFAULT_EXPIRY_MARGIN,
    ):
        self._storage = storage
        self._notifier = notifier or TokenChangeNotifier()
        self._expiry_margin = expiry_margin
        self._token: Optional[str] = None
        self._refresh_token: Optional[str] = None
        self._persistent = False
        # Last values seen in durable storage, used to detect outside changes
        self._seen: dict[str, Optional[str]] = {
            TOKEN_KEY: None,
            REFRESH_TOKEN_KEY: None,
        }

    @property
    def notifier(self) -> TokenChangeNotifier:
        return self._notifier

    @property
    def is_persistent(self) -> bool:
        return self._persistent

    # Storage helpers

    def _store(self, key: str, value: Optional[str]) -> None:
        if self._storage is None:
            logger.debug(f"No durable token storage configured, keeping {key} in memory")
            return
        try:
            if value is None:
                self._storage.remove(key)
            else:
                self._storage.set(key, value)
            self._seen[key] = value
        except TokenStorageError as e:
            logger.warning(f"Failed to write {key} to durable storage: {e.message}")

    def _load(self, key: str) -> Optional[str]:
        if self._storage is None:
            return None
        try:
            value = self._storage.get(key)
        except TokenStorageError as e:
            logger.debug(f"Failed to read {key} from durable storage: {e.message}")
            return None
        self._seen[key] = value
        return value

    def _remove(self, key: str) -> None:
        if self._storage is None:
            return
        try:
            self._storage.remove(key)
            self._seen[key] = None
        except TokenStorageError as e:
            logger.warning(f"Failed to remove {key} from durable storage: {e.message}")

    def _drop_persisted(self) -> None:
        # A session-only login replaces a persisted one; the file must not outlive it
        if self._persistent:
            self._persistent = False
            self._remove(TOKEN_KEY)
            self._remove(REFRESH_TOKEN_KEY)

    # Public API

    def set_token(self, token: Optional[str], persist: bool = False) -> None:
        """Store the access token in memory and, if persist, durably."""
        self._token = token
        if persist:
            self._persistent = True
            self._store(TOKEN_KEY, token)
        else:
            self._drop_persisted()
        self._notifier.publish(token)

    def set_refresh_token(self, token: Optional[str], persist: bool = False) -> None:
        """Store the refresh token in memory and, if persist, durably."""
        self._refresh_token = token
        if persist:
            self._persistent = True
            self._store(REFRESH_TOKEN_KEY, token)
        else:
            self._drop_persisted()

    def get_token(self) -> Optional[str]:
        if self._token:
            return self._token
        stored = self._load(TOKEN_KEY)
        if stored:
            self._token = stored
            self._persistent = True
        return stored or None

    def get_refresh_token(self) -> Optional[str]:
        if self._refresh_token:
            return self._refresh_token
        stored = self._load(REFRESH_TOKEN_KEY)
        if stored:
            self._refresh_token = stored
            self._persistent = True
        return stored or None

    def clear_token(self) -> None:
        """Wipe both tokens from memory and durable storage."""
        self._token = None
        self._refresh_token = None
        self._persistent = False
        self._remove(TOKEN_KEY)
        self._remove(REFRESH_TOKEN_KEY)
        self._notifier.publish(None)

    def parse_jwt(self, token: Optional[str]) -> Optional[JWTClaims]:
        return parse_jwt(token)

    def is_token_valid(self, token: Optional[str]) -> bool:
        return is_token_valid(token, margin=self._expiry_margin)

    def current_claims(self) -> Optional[JWTClaims]:
        """Claims of the current access token, if any."""
        return parse_jwt(self.get_token())

    def subscribe(self, listener: TokenListener) -> Callable[[], None]:
        return self._notifier.subscribe(listener)

    # Cross-process consistency

    def sync_from_storage(self) -> bool:
        """
        Adopt token changes written to durable storage by another process.

        Returns True when the access token changed (and was republished).
        """
        if self._storage is None:
            return False
        try:
            stored_token = self._storage.get(TOKEN_KEY)
            stored_refresh = self._storage.get(REFRESH_TOKEN_KEY)
        except TokenStorageError as e:
            logger.debug(f"Skipping storage sync: {e.message}")
            return False

        if stored_refresh != self._seen[REFRESH_TOKEN_KEY]:
            self._seen[REFRESH_TOKEN_KEY] = stored_refresh
            self._refresh_token = stored_refresh

        if stored_token == self._seen[TOKEN_KEY]:
            return False

        self._seen[TOKEN_KEY] = stored_token
        self._token = stored_token
        self._persistent = stored_token is not None
        logger.info("Session token changed in durable storage, republishing")
        self._notifier.publish(stored_token)
        return True

    async def watch_storage(self, interval: float = 2.0) -> None:
        """Poll durable storage until cancelled."""
        while True:
            self.sync_from_storage()
            await asyncio.sleep(interval)


def create_token_manager(settings: Optional[Settings] = None) -> TokenManager:
    """Build a token manager from settings."""
    settings = settings or get_settings()
    storage: Optional[ITokenStorage] = None
    if settings.token_storage_path:
        storage = FileTokenStorage(settings.token_storage_path)
    return TokenManager(storage=storage, expiry_margin=settings.token_expiry_margin)


# Module-level instance getter
_manager_instance: Optional[TokenManager] = None


def get_token_manager() -> TokenManager:
    """Get the token manager singleton."""
    global _manager_instance
    if _manager_instance is None:
        _manager_instance = create_token_manager()
    return _manager_instance


def reset_token_manager() -> None:
    """Reset the token manager singleton (for testing)."""
    global _manager_instance
    _manager_instance = None
