"""
Session module exceptions.
"""

from apartment_console.shared.exceptions import ConsoleError


class TokenStorageError(ConsoleError):
    """Raised when the durable token storage cannot be read or written."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(
            message,
            code="TOKEN_STORAGE_ERROR",
            details={"path": path},
        )
