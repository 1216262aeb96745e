"""
Users module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from apartment_console.shared.models import User

from .models import UserForm, UsernameAvailability


@runtime_checkable
class IUserService(Protocol):
    """
    Interface for user management.

    Listing, viewing and changing other users requires the admin role;
    the API answers 403 otherwise.
    """

    async def list_users(self) -> list[User]:
        """Fetch every user, following pagination."""
        ...

    async def get_user(self, user_id: int) -> User:
        """
        Fetch one user with their shares.

        Raises:
            ResourceNotFoundError: If the user doesn't exist
        """
        ...

    async def get_current_user(self) -> User:
        """Fetch the profile of the logged-in user (GET /me)."""
        ...

    async def register_user(self, form: UserForm) -> User:
        """
        Create a user.

        Raises:
            FormValidationError: If the form is invalid
        """
        ...

    async def update_user(self, user_id: int, form: UserForm) -> User:
        ...

    async def delete_user(self, user_id: int) -> None:
        ...

    async def check_username(
        self,
        username: str,
        exclude_user_id: Optional[int] = None,
    ) -> UsernameAvailability:
        """Whether username is free, ignoring the user being edited."""
        ...
