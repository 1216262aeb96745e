"""
Password reset flow.

Three unauthenticated calls: request a reset e-mail, verify the token from
the e-mailed link, and set the new password.
"""

import logging
from apartment_console.shared.exceptions import FormValidationError
from apartment_console.modules.http.interfaces import IApiClient
from apartment_console.modules.http.responses import (
    extract_error_message,
    raise_for_api_error,
    read_json,
)
from apartment_console.modules.users.validation import EMAIL_PATTERN, password_errors

from .exceptions import InvalidResetTokenError
from .models import ResetTokenVerification

logger = logging.getLogger(__name__)

RESET_PATH = "/password-reset"


class PasswordResetService:
    """Client for the /password-reset endpoints."""

    def __init__(self, client: IApiClient):
        self._client = client

    async def request_reset(self, email: str) -> None:
        """
        Ask the API to e-mail a reset link.

        Raises:
            FormValidationError: If the e-mail is missing or malformed
        """
        email = (email or "").strip()
        if not email:
            raise FormValidationError({"email": "Email is required"})
        if not EMAIL_PATTERN.search(email):
            raise FormValidationError({"email": "Email is invalid"})

        response = await self._client.send_unauthenticated(
            "POST", f"{RESET_PATH}/request", json={"email": email}
        )
        raise_for_api_error(response, default_message="Failed to request password reset")
        logger.info("Password reset requested")

    async def verify(self, token: str) -> str:
        """
        Check a reset token.

        Returns:
            The e-mail address the token was issued for

        Raises:
            InvalidResetTokenError: If the token is missing, unknown or expired
        """
        if not token:
            raise InvalidResetTokenError()

        response = await self._client.send_unauthenticated(
            "POST", f"{RESET_PATH}/verify", json={"token": token}
        )
        data = read_json(response)
        verification = ResetTokenVerification.model_validate(data if isinstance(data, dict) else {})
        if not response.is_success or not verification.valid:
            raise InvalidResetTokenError(
                extract_error_message(data, "Password reset link is invalid or has expired")
            )
        return verification.email or ""

    async def reset(self, token: str, password: str, confirm_password: str) -> None:
        """
        Set a new password.

        Raises:
            FormValidationError: If the password is too short or not confirmed
        """
        errors = password_errors(password, confirm_password, required=True)
        if errors:
            raise FormValidationError(errors)
        if not token:
            raise InvalidResetTokenError()

        response = await self._client.send_unauthenticated(
            "POST",
            f"{RESET_PATH}/reset",
            json={"token": token, "password": password},
        )
        raise_for_api_error(response, default_message="Failed to reset password")
        logger.info("Password was reset")
