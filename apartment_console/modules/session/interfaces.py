"""
Session module interfaces.

The token manager depends on ITokenStorage for its durable copy, so the
file-backed store can be swapped for an in-memory one in tests.
"""

from typing import Callable, Optional, Protocol, runtime_checkable

from .models import JWTClaims


TokenListener = Callable[[Optional[str]], None]


@runtime_checkable
class ITokenStorage(Protocol):
    """
    Durable key/value storage for the session tokens.

    Implementations raise TokenStorageError when the backing store
    cannot be accessed.
    """

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a value under key."""
        ...

    def remove(self, key: str) -> None:
        """Delete key if present."""
        ...


@runtime_checkable
class ITokenManager(Protocol):
    """
    Interface for session token operations.

    The HTTP client and the auth module depend on this protocol rather than
    on module-level token state.
    """

    def set_token(self, token: Optional[str], persist: bool = False) -> None:
        """Store the access token; write it to durable storage iff persist."""
        ...

    def set_refresh_token(self, token: Optional[str], persist: bool = False) -> None:
        """Store the refresh token; write it to durable storage iff persist."""
        ...

    def get_token(self) -> Optional[str]:
        """Return the access token from memory or durable storage."""
        ...

    def get_refresh_token(self) -> Optional[str]:
        """Return the refresh token from memory or durable storage."""
        ...

    def clear_token(self) -> None:
        """Wipe both tokens everywhere and notify subscribers."""
        ...

    def parse_jwt(self, token: Optional[str]) -> Optional[JWTClaims]:
        """Decode token claims, returning None for malformed tokens."""
        ...

    def is_token_valid(self, token: Optional[str]) -> bool:
        """Whether token expires later than the safety margin from now."""
        ...

    def subscribe(self, listener: TokenListener) -> Callable[[], None]:
        """Register a token-change listener; returns an unsubscribe callable."""
        ...

    @property
    def is_persistent(self) -> bool:
        """Whether the current session was stored durably."""
        ...
