"""
Base exception classes for the apartment console.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error reporting from the CLI and library callers.
"""

from typing import Optional, Any


class ConsoleError(Exception):
    """
    Base exception for all console errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for display or logging."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(ConsoleError):
    """Resource not found."""

    pass


class ValidationError(ConsoleError):
    """Input validation failed."""

    pass


class AuthenticationError(ConsoleError):
    """Authentication failed (invalid, expired or missing credentials)."""

    pass


class AuthorizationError(ConsoleError):
    """Authorization failed (insufficient permissions)."""

    pass


class ExternalServiceError(ConsoleError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class FormValidationError(ValidationError):
    """
    One or more form fields are invalid.

    All field problems are collected so they can be shown together;
    details["fields"] maps field name to message.
    """

    def __init__(self, errors: dict[str, str], message: str = "Please correct the highlighted fields"):
        super().__init__(message, code="FORM_INVALID", details={"fields": dict(errors)})
        self.errors = dict(errors)
