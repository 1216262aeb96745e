"""
Shares module interface.
"""

from typing import Any, Protocol, runtime_checkable

from .allocation import Number, ShareAllocation


@runtime_checkable
class IShareService(Protocol):
    """Interface for persisting ownership shares."""

    async def add_share(self, user_id: int, apartment_id: int, percentage: Number) -> Any:
        """
        Create a single share.

        Raises:
            InvalidPercentageError: If percentage is not in (0, 100]
        """
        ...

    async def replace_apartment_shares(self, apartment_id: int, allocation: ShareAllocation) -> Any:
        """Replace all shareholders of an apartment with allocation."""
        ...

    async def delete_share(self, share_id: int) -> None:
        ...
