"""
Apartment management service.

Saving an apartment with shareholders takes two requests: the apartment
itself, then PUT /udzialy/apartment/{id}. When only the first succeeds,
PartialSaveError reports the saved apartment.
"""

import logging
from decimal import Decimal
from typing import Any, Optional

from apartment_console.shared.exceptions import AuthenticationError, ConsoleError
from apartment_console.shared.models import Apartment
from apartment_console.shared.formatting import parse_number
from apartment_console.modules.http.interfaces import IApiClient
from apartment_console.modules.shares.allocation import ShareAllocation
from apartment_console.modules.shares.interfaces import IShareService
from apartment_console.modules.shares.service import ShareService

from .exceptions import PartialSaveError
from .interfaces import IApartmentService
from .models import ApartmentForm
from .validation import validate_apartment_form

logger = logging.getLogger(__name__)

APARTMENTS_PATH = "/apartments"
ME_PATH = "/me"


def _unwrap(data: Any) -> dict:
    if isinstance(data, dict) and isinstance(data.get("apartment"), dict):
        return data["apartment"]
    return data if isinstance(data, dict) else {}


def apartments_from_profile(profile: Any) -> list[Apartment]:
    """
    Apartments embedded in a /me response, tagged with the user's share.

    Shares without a named apartment are skipped.
    """
    shares = profile.get("udzialy") if isinstance(profile, dict) else None
    apartments = []
    for share in shares or []:
        apartment = share.get("apartment") if isinstance(share, dict) else None
        if not isinstance(apartment, dict) or not apartment.get("name"):
            continue
        record = Apartment.model_validate(apartment)
        percentage = Decimal(str(parse_number(share.get("procent"))))
        apartments.append(record.model_copy(update={"user_percentage": percentage}))
    return apartments


class ApartmentService(IApartmentService):
    """API-backed implementation of IApartmentService."""

    def __init__(self, client: IApiClient, shares: Optional[IShareService] = None):
        self._client = client
        self._shares = shares or ShareService(client)

    async def list_apartments(self) -> list[Apartment]:
        page = await self._client.get_collection(APARTMENTS_PATH)
        return [Apartment.model_validate(item) for item in page.items]

    async def list_my_apartments(self) -> list[Apartment]:
        profile = await self._client.request_json(
            "GET", ME_PATH, default_message="Failed to fetch apartments"
        )
        return apartments_from_profile(profile)

    async def get_apartment(self, apartment_id: int) -> Apartment:
        data = await self._client.request_json(
            "GET",
            f"{APARTMENTS_PATH}/{apartment_id}",
            default_message="Failed to fetch apartment",
            not_found_message="Apartment not found",
        )
        return Apartment.model_validate(data)

    async def create_apartment(
        self,
        form: ApartmentForm,
        shareholders: Optional[ShareAllocation] = None,
    ) -> Apartment:
        form = validate_apartment_form(form)
        data = await self._client.request_json(
            "POST",
            APARTMENTS_PATH,
            form.to_payload(),
            default_message="Error creating apartment",
        )
        apartment = Apartment.model_validate(_unwrap(data))
        logger.info(f"Created apartment {apartment.id} ({apartment.name})")

        if shareholders is not None and len(shareholders) > 0:
            await self._save_shareholders(apartment, shareholders, "Apartment was created")
        return apartment

    async def update_apartment(
        self,
        apartment_id: int,
        form: ApartmentForm,
        shareholders: Optional[ShareAllocation] = None,
    ) -> Apartment:
        form = validate_apartment_form(form)
        data = await self._client.request_json(
            "PUT",
            f"{APARTMENTS_PATH}/{apartment_id}",
            form.to_payload(),
            default_message="Failed to update apartment",
            not_found_message="Apartment not found",
        )
        record = _unwrap(data)
        record.setdefault("id", apartment_id)
        apartment = Apartment.model_validate(record)

        if shareholders is not None:
            await self._save_shareholders(apartment, shareholders, "Apartment was updated")
        return apartment

    async def _save_shareholders(
        self,
        apartment: Apartment,
        shareholders: ShareAllocation,
        saved_message: str,
    ) -> None:
        try:
            await self._shares.replace_apartment_shares(apartment.id, shareholders)
        except AuthenticationError:
            raise
        except ConsoleError as e:
            logger.warning(f"Shareholders of apartment {apartment.id} not saved: {e.message}")
            raise PartialSaveError(
                f"{saved_message}, but updating shareholders failed: {e.message}",
                saved=apartment,
                step="shareholders",
            ) from e

    async def delete_apartment(self, apartment_id: int) -> None:
        await self._client.request_json(
            "DELETE",
            f"{APARTMENTS_PATH}/{apartment_id}",
            default_message="Failed to delete apartment",
            not_found_message="Apartment not found",
        )
        logger.info(f"Deleted apartment {apartment_id}")

    def picture_url(self, apartment: Apartment) -> Optional[str]:
        return self._client.resolve_asset_url(apartment.picture)
