"""
Shared infrastructure for the apartment console.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- exceptions: Base exception classes
- models: API record models and collection parsing
- formatting: Date, price and VAT helpers

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .exceptions import (
    ConsoleError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    FormValidationError,
)
from .models import (
    Apartment,
    ApartmentSummary,
    InvoiceInfo,
    Page,
    Share,
    TokenPair,
    User,
    UserSummary,
    parse_collection,
)

__all__ = [
    "Settings",
    "get_settings",
    "ConsoleError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ExternalServiceError",
    "FormValidationError",
    "Apartment",
    "ApartmentSummary",
    "InvoiceInfo",
    "Page",
    "Share",
    "TokenPair",
    "User",
    "UserSummary",
    "parse_collection",
]
