"""
Share allocation with even redistribution.

Keeps an ordered list of (participant, percentage) pairs for one apartment
or one user. Adding a participant splits 100% evenly: every entry gets
floor(100 / n) and the first (100 mod n) entries get one extra point, so
the total is exactly 100 and no two shares differ by more than 1.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Union

from apartment_console.shared.models import Apartment, User

from .exceptions import (
    AllocationExceededError,
    DuplicateParticipantError,
    InvalidPercentageError,
    ParticipantNotFoundError,
)
from .models import ShareEntry

logger = logging.getLogger(__name__)

FULL_ALLOCATION = Decimal("100")

Number = Union[int, float, str, Decimal]


def to_percentage(value: Number) -> Decimal:
    """Convert user input to a Decimal percentage."""
    if isinstance(value, bool):
        raise InvalidPercentageError(value)
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise InvalidPercentageError(value, "Percentage must be a number") from e
    if not result.is_finite():
        raise InvalidPercentageError(value, "Percentage must be a number")
    return result


def even_split(count: int) -> list[Decimal]:
    """Percentages for count participants, remainder front-loaded."""
    if count <= 0:
        return []
    base, remainder = divmod(100, count)
    return [Decimal(base + (1 if index < remainder else 0)) for index in range(count)]


def json_number(value: Decimal) -> Union[int, float]:
    """Decimal as a JSON-friendly int or float."""
    return int(value) if value == value.to_integral_value() else float(value)


class ShareAllocation:
    """
    Editable share allocation.

    Two screens use this with different removal behaviour: the create flow
    re-splits the remaining participants evenly, the edit flow leaves the
    remaining percentages untouched for the admin to adjust by hand.
    """

    def __init__(
        self,
        entries: Iterable[ShareEntry] = (),
        rebalance_on_remove: bool = False,
        participant_key: str = "user_id",
    ):
        self._entries: list[ShareEntry] = []
        for entry in entries:
            if self._index_of(entry.participant_id) is not None:
                raise DuplicateParticipantError(entry.participant_id)
            self._entries.append(entry)
        self.rebalance_on_remove = rebalance_on_remove
        self.participant_key = participant_key

    @classmethod
    def for_create(cls) -> "ShareAllocation":
        return cls(rebalance_on_remove=True)

    @classmethod
    def for_edit(cls, entries: Iterable[ShareEntry] = ()) -> "ShareAllocation":
        return cls(entries, rebalance_on_remove=False)

    @classmethod
    def from_apartment(
        cls,
        apartment: Apartment,
        rebalance_on_remove: bool = False,
    ) -> "ShareAllocation":
        """Shareholders of an apartment, keyed by user ID."""
        entries = []
        for share in apartment.udzialy:
            if share.user is None:
                logger.debug(f"Skipping share {share.id} without user")
                continue
            entries.append(
                ShareEntry(
                    participant_id=share.user.id,
                    percentage=share.procent,
                    label=share.user.full_name or share.user.username,
                    share_id=share.id,
                )
            )
        return cls(entries, rebalance_on_remove=rebalance_on_remove, participant_key="user_id")

    @classmethod
    def from_user(
        cls,
        user: User,
        rebalance_on_remove: bool = False,
    ) -> "ShareAllocation":
        """Shares held by a user, keyed by apartment ID."""
        entries = []
        for share in user.udzialy:
            if share.apartment is None:
                logger.debug(f"Skipping share {share.id} without apartment")
                continue
            entries.append(
                ShareEntry(
                    participant_id=share.apartment.id,
                    percentage=share.procent,
                    label=share.apartment.name,
                    share_id=share.id,
                )
            )
        return cls(entries, rebalance_on_remove=rebalance_on_remove, participant_key="apartment_id")

    # Queries

    @property
    def entries(self) -> list[ShareEntry]:
        return list(self._entries)

    @property
    def participant_ids(self) -> list[int]:
        return [entry.participant_id for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, participant_id: object) -> bool:
        return any(entry.participant_id == participant_id for entry in self._entries)

    def _index_of(self, participant_id: int) -> Optional[int]:
        for index, entry in enumerate(self._entries):
            if entry.participant_id == participant_id:
                return index
        return None

    def get(self, participant_id: int) -> ShareEntry:
        index = self._index_of(participant_id)
        if index is None:
            raise ParticipantNotFoundError(participant_id)
        return self._entries[index]

    @property
    def total(self) -> Decimal:
        return sum((entry.percentage for entry in self._entries), Decimal("0"))

    @property
    def is_complete(self) -> bool:
        """Only an exact 100% total is a valid allocation."""
        return self.total == FULL_ALLOCATION

    @property
    def is_under_allocated(self) -> bool:
        return bool(self._entries) and self.total < FULL_ALLOCATION

    # Mutations

    def redistribute(self) -> None:
        """Split 100% evenly across the current participants."""
        split = even_split(len(self._entries))
        self._entries = [
            entry.with_percentage(percentage)
            for entry, percentage in zip(self._entries, split)
        ]

    def add(
        self,
        participant_id: int,
        label: Optional[str] = None,
        share_id: Optional[int] = None,
    ) -> ShareEntry:
        """
        Add a participant and re-split evenly.

        Raises:
            DuplicateParticipantError: If the participant already has a share
        """
        if participant_id in self:
            raise DuplicateParticipantError(participant_id)

        self._entries.append(
            ShareEntry(participant_id=participant_id, label=label, share_id=share_id)
        )
        self.redistribute()
        return self.get(participant_id)

    def remove(self, participant_id: int) -> ShareEntry:
        """
        Remove a participant.

        Raises:
            ParticipantNotFoundError: If the participant has no share
        """
        index = self._index_of(participant_id)
        if index is None:
            raise ParticipantNotFoundError(participant_id)

        removed = self._entries.pop(index)
        if self.rebalance_on_remove:
            self.redistribute()
        return removed

    def update_percentage(self, participant_id: int, value: Number) -> ShareEntry:
        """
        Set one participant's percentage by hand.

        A total below 100 is accepted; state is unchanged when the edit
        is rejected.

        Raises:
            ParticipantNotFoundError: If the participant has no share
            InvalidPercentageError: If value is not a number in 0-100
            AllocationExceededError: If the other shares plus value exceed 100
        """
        index = self._index_of(participant_id)
        if index is None:
            raise ParticipantNotFoundError(participant_id)

        percentage = to_percentage(value)
        if percentage < 0 or percentage > FULL_ALLOCATION:
            raise InvalidPercentageError(value)

        others_total = self.total - self._entries[index].percentage
        if others_total + percentage > FULL_ALLOCATION:
            raise AllocationExceededError(participant_id, percentage, others_total)

        self._entries[index] = self._entries[index].with_percentage(percentage)
        return self._entries[index]

    # Serialization

    def to_payload(self) -> list[dict]:
        """Entries in the API shape, e.g. [{"user_id": 3, "procent": 50}]."""
        return [
            {
                self.participant_key: entry.participant_id,
                "procent": json_number(entry.percentage),
            }
            for entry in self._entries
        ]
