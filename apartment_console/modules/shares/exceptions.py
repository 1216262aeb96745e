"""
Shares module exceptions.
"""

from decimal import Decimal

from apartment_console.shared.exceptions import NotFoundError, ValidationError


class DuplicateParticipantError(ValidationError):
    """Raised when adding a participant that already holds a share."""

    def __init__(self, participant_id: int):
        super().__init__(
            f"Participant {participant_id} already has a share",
            code="DUPLICATE_PARTICIPANT",
            details={"participant_id": participant_id},
        )


class ParticipantNotFoundError(NotFoundError):
    """Raised when removing or editing a participant that is not allocated."""

    def __init__(self, participant_id: int):
        super().__init__(
            f"Participant {participant_id} has no share",
            code="PARTICIPANT_NOT_FOUND",
            details={"participant_id": participant_id},
        )


class InvalidPercentageError(ValidationError):
    """Raised for percentages outside the allowed range."""

    def __init__(self, percentage: object, message: str = "Percentage must be between 0 and 100"):
        super().__init__(
            message,
            code="INVALID_PERCENTAGE",
            details={"percentage": str(percentage)},
        )


class AllocationExceededError(ValidationError):
    """Raised when an edit would push the total above 100%."""

    def __init__(self, participant_id: int, requested: Decimal, others_total: Decimal):
        super().__init__(
            "Total shares cannot exceed 100%",
            code="ALLOCATION_EXCEEDED",
            details={
                "participant_id": participant_id,
                "requested": str(requested),
                "others_total": str(others_total),
            },
        )
        self.requested = requested
        self.others_total = others_total
