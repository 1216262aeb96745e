"""
Authentication module exceptions.
"""

from apartment_console.shared.exceptions import AuthenticationError, ValidationError


class LoginFailedError(AuthenticationError):
    """Raised when the API rejects the credentials or returns no token."""

    def __init__(self, message: str = "Login failed"):
        super().__init__(message, code="LOGIN_FAILED")


class NotAuthenticatedError(AuthenticationError):
    """Raised when an operation needs a logged-in user and there is none."""

    def __init__(self, message: str = "You are not logged in"):
        super().__init__(message, code="NOT_AUTHENTICATED")


class InvalidResetTokenError(ValidationError):
    """Raised when a password-reset token is unknown or expired."""

    def __init__(self, message: str = "Password reset link is invalid or has expired"):
        super().__init__(message, code="INVALID_RESET_TOKEN")
