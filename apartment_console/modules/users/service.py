"""
User management service.
"""

import logging
from typing import Any, Optional

from apartment_console.shared.exceptions import AuthenticationError, ConsoleError
from apartment_console.shared.models import User
from apartment_console.modules.http.interfaces import IApiClient

from .interfaces import IUserService
from .models import UserForm, UsernameAvailability
from .validation import MIN_USERNAME_LENGTH, validate_user_form

logger = logging.getLogger(__name__)

USERS_PATH = "/users"
ME_PATH = "/me"


def _unwrap(data: Any, key: str) -> Any:
    """Create/update endpoints answer either {key: record} or the record itself."""
    if isinstance(data, dict) and isinstance(data.get(key), dict):
        return data[key]
    return data


class UserService(IUserService):
    """API-backed implementation of IUserService."""

    def __init__(self, client: IApiClient):
        self._client = client

    async def list_users(self) -> list[User]:
        page = await self._client.get_collection(USERS_PATH)
        return [User.model_validate(item) for item in page.items]

    async def get_user(self, user_id: int) -> User:
        data = await self._client.request_json(
            "GET",
            f"{USERS_PATH}/{user_id}",
            default_message="Failed to fetch user",
            not_found_message="User not found",
        )
        return User.model_validate(data)

    async def get_current_user(self) -> User:
        data = await self._client.request_json("GET", ME_PATH, default_message="Failed to fetch current user")
        return User.model_validate(data)

    async def register_user(self, form: UserForm) -> User:
        validate_user_form(form, creating=True)
        data = await self._client.request_json(
            "POST",
            f"{USERS_PATH}/register",
            form.to_register_payload(),
            default_message="Error creating user",
        )
        user = User.model_validate(_unwrap(data, "user") or {})
        logger.info(f"Registered user {form.username.strip()}")
        return user

    async def update_user(self, user_id: int, form: UserForm) -> User:
        validate_user_form(form, creating=False)
        data = await self._client.request_json(
            "PUT",
            f"{USERS_PATH}/{user_id}",
            form.to_update_payload(),
            default_message="Error updating user",
            not_found_message="User not found",
        )
        if form.password:
            logger.info(f"Password changed for user {user_id}")
        return User.model_validate(_unwrap(data, "user") or {})

    async def delete_user(self, user_id: int) -> None:
        await self._client.request_json(
            "DELETE",
            f"{USERS_PATH}/{user_id}",
            default_message="Error deleting user",
            not_found_message="User not found",
        )
        logger.info(f"Deleted user {user_id}")

    async def check_username(
        self,
        username: str,
        exclude_user_id: Optional[int] = None,
    ) -> UsernameAvailability:
        username = (username or "").strip()
        if len(username) < MIN_USERNAME_LENGTH:
            return UsernameAvailability(
                available=False,
                error=f"Username must be at least {MIN_USERNAME_LENGTH} characters",
            )

        try:
            data = await self._client.request_json(
                "POST",
                f"{USERS_PATH}/check-username",
                {"username": username, "excludeUserId": exclude_user_id},
                default_message="Failed to check username",
            )
        except AuthenticationError:
            raise
        except ConsoleError as e:
            logger.warning(f"Username check failed: {e.message}")
            return UsernameAvailability(available=False, error=e.message)

        available = bool(data.get("available")) if isinstance(data, dict) else False
        return UsernameAvailability(available=available)
