"""
Apartments module exceptions.
"""

from typing import Any

from apartment_console.shared.exceptions import ConsoleError, ValidationError


class InvalidImageError(ValidationError):
    """Raised for picture uploads of the wrong type or size."""

    def __init__(self, message: str, path: str):
        super().__init__(message, code="INVALID_IMAGE", details={"path": path})


class PartialSaveError(ConsoleError):
    """
    Raised when the apartment was saved but a follow-up step failed.

    The saved apartment is available as `saved` so the caller can report
    what did persist.
    """

    def __init__(self, message: str, saved: Any, step: str):
        super().__init__(
            message,
            code="PARTIAL_SAVE",
            details={"step": step},
        )
        self.saved = saved
        self.step = step
