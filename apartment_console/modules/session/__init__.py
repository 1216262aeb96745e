"""
Session module.

Stores the access/refresh token pair, validates and decodes tokens, and
notifies subscribers of every change.

Public API:
- ITokenManager / ITokenStorage: Interfaces
- TokenManager: Token manager implementation
- parse_jwt / is_token_valid: Pure token helpers
- MemoryTokenStorage / FileTokenStorage: Storage backends
"""

from .interfaces import ITokenManager, ITokenStorage, TokenListener
from .models import JWTClaims
from .exceptions import TokenStorageError
from .notifier import TokenChangeNotifier
from .storage import (
    MemoryTokenStorage,
    FileTokenStorage,
    TOKEN_KEY,
    REFRESH_TOKEN_KEY,
)
from .service import (
    TokenManager,
    parse_jwt,
    is_token_valid,
    create_token_manager,
    get_token_manager,
    reset_token_manager,
)

__all__ = [
    # Interfaces
    "ITokenManager",
    "ITokenStorage",
    "TokenListener",
    # Models
    "JWTClaims",
    # Exceptions
    "TokenStorageError",
    # Implementation
    "TokenChangeNotifier",
    "MemoryTokenStorage",
    "FileTokenStorage",
    "TOKEN_KEY",
    "REFRESH_TOKEN_KEY",
    "TokenManager",
    "parse_jwt",
    "is_token_valid",
    "create_token_manager",
    "get_token_manager",
    "reset_token_manager",
]
