from decimal import Decimal

import pytest

from apartment_console.modules.shares import (
    AllocationExceededError,
    DuplicateParticipantError,
    InvalidPercentageError,
    ParticipantNotFoundError,
    ShareAllocation,
    ShareEntry,
)
from apartment_console.modules.shares.allocation import even_split, json_number, to_percentage
from apartment_console.shared.models import Apartment, ApartmentSummary, Share, User, UserSummary


def percentages(allocation):
    return [entry.percentage for entry in allocation.entries]


class TestEvenSplit:
    @pytest.mark.parametrize("count", range(1, 13))
    def test_sums_to_100_and_differs_by_at_most_one(self, count):
        split = even_split(count)
        assert sum(split) == 100
        assert max(split) - min(split) <= 1

    def test_remainder_goes_first(self):
        """The first entries should carry the extra point."""
        assert even_split(3) == [Decimal(34), Decimal(33), Decimal(33)]
        assert even_split(6) == [17, 17, 17, 17, 16, 16]

    def test_zero(self):
        assert even_split(0) == []


class TestAdd:
    def test_adds_keep_total_at_100(self):
        """Every add should re-split to exactly 100."""
        allocation = ShareAllocation.for_create()
        for participant in range(1, 8):
            allocation.add(participant)
            values = percentages(allocation)
            assert sum(values) == 100
            assert max(values) - min(values) <= 1
        assert allocation.is_complete

    def test_three_participants(self):
        allocation = ShareAllocation.for_create()
        for participant in (10, 20, 30):
            allocation.add(participant, label=f"user {participant}")
        assert percentages(allocation) == [34, 33, 33]
        assert allocation.get(10).label == "user 10"

    def test_duplicate_rejected(self):
        allocation = ShareAllocation.for_create()
        allocation.add(1)
        with pytest.raises(DuplicateParticipantError) as exc_info:
            allocation.add(1)
        assert exc_info.value.code == "DUPLICATE_PARTICIPANT"
        assert len(allocation) == 1

    def test_duplicate_initial_entries_rejected(self):
        with pytest.raises(DuplicateParticipantError):
            ShareAllocation([ShareEntry(participant_id=1), ShareEntry(participant_id=1)])


class TestRemove:
    def test_create_flow_rebalances(self):
        """The create flow should re-split the remaining participants."""
        allocation = ShareAllocation.for_create()
        for participant in (1, 2, 3):
            allocation.add(participant)
        allocation.remove(2)
        assert percentages(allocation) == [50, 50]
        assert allocation.participant_ids == [1, 3]

    def test_edit_flow_keeps_percentages(self):
        """The edit flow should leave the remaining values alone."""
        allocation = ShareAllocation.for_edit(
            [
                ShareEntry(participant_id=1, percentage=Decimal(50)),
                ShareEntry(participant_id=2, percentage=Decimal(30)),
                ShareEntry(participant_id=3, percentage=Decimal(20)),
            ]
        )
        removed = allocation.remove(3)
        assert removed.percentage == 20
        assert percentages(allocation) == [50, 30]
        assert allocation.is_under_allocated
        assert not allocation.is_complete

    def test_unknown_participant(self):
        with pytest.raises(ParticipantNotFoundError):
            ShareAllocation.for_create().remove(9)


class TestUpdatePercentage:
    @pytest.fixture
    def allocation(self):
        allocation = ShareAllocation.for_edit()
        allocation.add(1)
        allocation.add(2)
        allocation.update_percentage(2, 30)
        allocation.update_percentage(1, 60)
        return allocation

    def test_under_allocation_allowed(self, allocation):
        assert allocation.total == 90
        assert allocation.is_under_allocated

    def test_exceeding_rejected_without_change(self, allocation):
        """60 + 71 should be rejected and leave 60/30 in place."""
        with pytest.raises(AllocationExceededError) as exc_info:
            allocation.update_percentage(2, 71)
        assert exc_info.value.code == "ALLOCATION_EXCEEDED"
        assert percentages(allocation) == [60, 30]

    def test_exactly_100_accepted(self, allocation):
        allocation.update_percentage(2, "40")
        assert allocation.is_complete

    def test_fractional_values(self, allocation):
        allocation.update_percentage(2, "33.5")
        assert allocation.total == Decimal("93.5")

    @pytest.mark.parametrize("value", [-1, "101", "abc", "", float("nan"), True])
    def test_invalid_values(self, allocation, value):
        with pytest.raises(InvalidPercentageError):
            allocation.update_percentage(1, value)
        assert percentages(allocation) == [60, 30]

    def test_unknown_participant(self, allocation):
        with pytest.raises(ParticipantNotFoundError):
            allocation.update_percentage(99, 10)


class TestConversion:
    def test_from_apartment(self):
        """Should key by user and skip shares without a user."""
        apartment = Apartment(
            id=5,
            name="Loft",
            udzialy=[
                Share(id=1, procent="70", user=UserSummary(id=3, name="Anna", surname="Nowak")),
                Share(id=2, procent="30", user=UserSummary(id=4, username="piotr")),
                Share(id=3, procent="10"),
            ],
        )
        allocation = ShareAllocation.from_apartment(apartment)
        assert allocation.participant_ids == [3, 4]
        assert [e.label for e in allocation.entries] == ["Anna Nowak", "piotr"]
        assert allocation.get(3).share_id == 1
        assert allocation.to_payload() == [
            {"user_id": 3, "procent": 70},
            {"user_id": 4, "procent": 30},
        ]

    def test_from_user(self):
        """Should key by apartment."""
        user = User(
            id=3,
            udzialy=[Share(id=9, procent="50.5", apartment=ApartmentSummary(id=5, name="Loft"))],
        )
        allocation = ShareAllocation.from_user(user)
        assert allocation.to_payload() == [{"apartment_id": 5, "procent": 50.5}]

    def test_json_number(self):
        assert json_number(Decimal("50")) == 50
        assert isinstance(json_number(Decimal("50.0")), int)
        assert json_number(Decimal("33.3")) == 33.3

    def test_to_percentage(self):
        assert to_percentage(" 12.5 ") == Decimal("12.5")
        with pytest.raises(InvalidPercentageError):
            to_percentage("inf")
