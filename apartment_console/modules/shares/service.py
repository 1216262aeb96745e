"""
Share persistence.
"""

import logging
from typing import Any

from apartment_console.modules.http.interfaces import IApiClient

from .allocation import FULL_ALLOCATION, Number, ShareAllocation, json_number, to_percentage
from .exceptions import InvalidPercentageError
from .interfaces import IShareService

logger = logging.getLogger(__name__)

SHARES_PATH = "/udzialy"


class ShareService(IShareService):
    """Creates, replaces and deletes shares through the API."""

    def __init__(self, client: IApiClient):
        self._client = client

    async def add_share(self, user_id: int, apartment_id: int, percentage: Number) -> Any:
        value = to_percentage(percentage)
        if value <= 0 or value > FULL_ALLOCATION:
            raise InvalidPercentageError(percentage)

        logger.info(f"Adding {value}% share of apartment {apartment_id} for user {user_id}")
        return await self._client.request_json(
            "POST",
            SHARES_PATH,
            {"user_id": user_id, "apartment_id": apartment_id, "procent": json_number(value)},
            default_message="Failed to add share",
        )

    async def replace_apartment_shares(self, apartment_id: int, allocation: ShareAllocation) -> Any:
        if not allocation.is_complete:
            logger.warning(
                f"Saving shareholders of apartment {apartment_id} with total {allocation.total}%"
            )
        return await self._client.request_json(
            "PUT",
            f"{SHARES_PATH}/apartment/{apartment_id}",
            {"shareholders": allocation.to_payload()},
            default_message="Failed to update shareholders",
        )

    async def delete_share(self, share_id: int) -> None:
        await self._client.request_json(
            "DELETE",
            f"{SHARES_PATH}/{share_id}",
            default_message="Failed to delete share",
            not_found_message="Share not found",
        )
