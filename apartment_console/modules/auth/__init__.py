"""
Authentication module.

Login, refresh and logout on top of the shared session, the auth/user
context objects that follow token changes, and the password reset flow.

Public API:
- IAuthService: Interface for authentication
- AuthService: Implementation using the API client
- AuthContext / UserContext: Current identity and full profile
- PasswordResetService: Request, verify and complete a password reset
"""

from .interfaces import IAuthService
from .models import LoginResult, ResetTokenVerification
from .service import AuthService, LOGIN_PATH, validate_credentials
from .context import AuthContext, UserContext
from .password_reset import PasswordResetService
from .exceptions import (
    LoginFailedError,
    NotAuthenticatedError,
    InvalidResetTokenError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "LoginResult",
    "ResetTokenVerification",
    # Implementation
    "AuthService",
    "LOGIN_PATH",
    "validate_credentials",
    "AuthContext",
    "UserContext",
    "PasswordResetService",
    # Exceptions
    "LoginFailedError",
    "NotAuthenticatedError",
    "InvalidResetTokenError",
]
