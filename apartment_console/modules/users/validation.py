"""
User form validation.

Every field problem is collected so the caller can display them together.
"""

import re

from apartment_console.shared.exceptions import FormValidationError

from .models import UserForm

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
PHONE_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$")
MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


def password_errors(password: str, confirm_password: str, required: bool = True) -> dict[str, str]:
    """Errors for a new password and its confirmation."""
    errors: dict[str, str] = {}
    if not password:
        if required:
            errors["password"] = "Password is required"
        elif confirm_password:
            errors["confirm_password"] = "Passwords do not match"
        return errors
    if len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    if password != confirm_password:
        errors["confirm_password"] = "Passwords do not match"
    return errors


def validate_user_form(form: UserForm, creating: bool = True) -> None:
    """
    Validate a user form.

    Raises:
        FormValidationError: With one message per invalid field
    """
    errors: dict[str, str] = {}

    if not form.name.strip():
        errors["name"] = "Name is required"
    if not form.surname.strip():
        errors["surname"] = "Surname is required"

    email = form.email.strip()
    if not email:
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.search(email):
        errors["email"] = "Email is invalid"

    username = form.username.strip()
    if not username:
        errors["username"] = "Username is required"
    elif len(username) < MIN_USERNAME_LENGTH:
        errors["username"] = f"Username must be at least {MIN_USERNAME_LENGTH} characters"

    phone = form.phone.strip()
    if phone and not PHONE_PATTERN.match(phone):
        errors["phone"] = "Phone number must start with + and country code (e.g. +48123456789)"

    errors.update(password_errors(form.password, form.confirm_password, required=creating))

    if errors:
        raise FormValidationError(errors)
