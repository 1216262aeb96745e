"""
Shares module.

Editing and persisting apartment ownership shares.

Public API:
- ShareAllocation: Ordered participant/percentage list with even redistribution
- ShareEntry: One participant's share
- ShareService: Share CRUD against the API
- Exceptions: DuplicateParticipantError, AllocationExceededError, etc.
"""

from .models import ShareEntry
from .allocation import FULL_ALLOCATION, ShareAllocation, even_split, to_percentage
from .interfaces import IShareService
from .service import ShareService
from .exceptions import (
    DuplicateParticipantError,
    ParticipantNotFoundError,
    InvalidPercentageError,
    AllocationExceededError,
)

__all__ = [
    # Models
    "ShareEntry",
    # Allocation
    "FULL_ALLOCATION",
    "ShareAllocation",
    "even_split",
    "to_percentage",
    # Interface
    "IShareService",
    # Implementation
    "ShareService",
    # Exceptions
    "DuplicateParticipantError",
    "ParticipantNotFoundError",
    "InvalidPercentageError",
    "AllocationExceededError",
]
