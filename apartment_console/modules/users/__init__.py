"""
Users module.

User administration: listing, registration, editing, deletion, username
availability, and validation of the user form.

Public API:
- IUserService: Interface for user management
- UserService: API-backed implementation
- UserForm: Form values and request payloads
- validate_user_form: Collects all field errors into FormValidationError
"""

from .interfaces import IUserService
from .models import UserForm, UsernameAvailability
from .validation import (
    EMAIL_PATTERN,
    PHONE_PATTERN,
    MIN_USERNAME_LENGTH,
    MIN_PASSWORD_LENGTH,
    password_errors,
    validate_user_form,
)
from .service import UserService

__all__ = [
    # Interface
    "IUserService",
    # Models
    "UserForm",
    "UsernameAvailability",
    # Validation
    "EMAIL_PATTERN",
    "PHONE_PATTERN",
    "MIN_USERNAME_LENGTH",
    "MIN_PASSWORD_LENGTH",
    "password_errors",
    "validate_user_form",
    # Implementation
    "UserService",
]
