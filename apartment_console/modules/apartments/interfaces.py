"""
Apartments module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from apartment_console.shared.models import Apartment
from apartment_console.modules.shares.allocation import ShareAllocation

from .models import ApartmentForm


@runtime_checkable
class IApartmentService(Protocol):
    """Interface for apartment management."""

    async def list_apartments(self) -> list[Apartment]:
        """All apartments (admin view), following pagination."""
        ...

    async def list_my_apartments(self) -> list[Apartment]:
        """Apartments the current user holds shares in, with user_percentage set."""
        ...

    async def get_apartment(self, apartment_id: int) -> Apartment:
        """
        Raises:
            ResourceNotFoundError: If the apartment doesn't exist
        """
        ...

    async def create_apartment(
        self,
        form: ApartmentForm,
        shareholders: Optional[ShareAllocation] = None,
    ) -> Apartment:
        """
        Create an apartment, then save its shareholders if given.

        Raises:
            FormValidationError: If the form is invalid
            PartialSaveError: If the apartment was created but the shareholders weren't
        """
        ...

    async def update_apartment(
        self,
        apartment_id: int,
        form: ApartmentForm,
        shareholders: Optional[ShareAllocation] = None,
    ) -> Apartment:
        ...

    async def delete_apartment(self, apartment_id: int) -> None:
        ...

    def picture_url(self, apartment: Apartment) -> Optional[str]:
        ...
