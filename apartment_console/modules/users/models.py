"""
Users module data models.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from apartment_console.shared.models import InvoiceInfo
from apartment_console.modules.roles import USER_ROLE


class UserForm(BaseModel):
    """
    Values entered on the create/edit user form.

    Password fields are required when creating a user and optional when
    editing one (empty means "keep the current password").
    """

    name: str = ""
    surname: str = ""
    email: str = ""
    username: str = ""
    phone: str = ""
    role: str = Field(default=USER_ROLE, description="ROLE_ADMIN or ROLE_USER")
    password: str = ""
    confirm_password: str = ""
    invoice_info: Optional[InvoiceInfo] = None

    def _profile_payload(self) -> dict[str, Any]:
        return {
            "username": self.username.strip(),
            "email": self.email.strip(),
            "name": self.name.strip(),
            "surname": self.surname.strip(),
            "phone": self.phone.strip() or None,
            "roles": [self.role],
        }

    def to_register_payload(self) -> dict[str, Any]:
        """Body for POST /users/register."""
        payload = self._profile_payload()
        payload["password"] = self.password
        return payload

    def to_update_payload(self) -> dict[str, Any]:
        """Body for PUT /users/{id}; the password is only sent when changed."""
        payload = self._profile_payload()
        if self.password:
            payload["password"] = self.password
            payload["confirmPassword"] = self.confirm_password
        if self.invoice_info is not None:
            payload["invoiceInfo"] = self.invoice_info.model_dump(by_alias=True)
        return payload


class UsernameAvailability(BaseModel):
    """Result of a username availability check."""

    available: bool = False
    error: Optional[str] = None
