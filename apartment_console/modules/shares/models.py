"""
Shares module data models.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ShareEntry(BaseModel):
    """
    One participant of a share allocation.

    The participant is a user when editing an apartment's shareholders and
    an apartment when editing a user's shares.
    """

    model_config = ConfigDict(frozen=True)

    participant_id: int = Field(..., description="User or apartment ID")
    percentage: Decimal = Field(default=Decimal("0"), description="Percentage 0-100")
    label: Optional[str] = Field(None, description="Display name of the participant")
    share_id: Optional[int] = Field(None, description="ID of the persisted share, if any")

    def with_percentage(self, percentage: Decimal) -> "ShareEntry":
        return self.model_copy(update={"percentage": percentage})
