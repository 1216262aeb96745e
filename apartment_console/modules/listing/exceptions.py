"""
Listing module exceptions.
"""

from apartment_console.shared.exceptions import ValidationError


class UnknownSortFieldError(ValidationError):
    """Raised when sorting by a field the list does not support."""

    def __init__(self, field: str, allowed: list[str]):
        super().__init__(
            f"Cannot sort by '{field}'. Allowed: {', '.join(allowed)}",
            code="UNKNOWN_SORT_FIELD",
            details={"field": field, "allowed": allowed},
        )


class UnknownTabError(ValidationError):
    """Raised when selecting a category tab the list does not define."""

    def __init__(self, tab: str, allowed: list[str]):
        super().__init__(
            f"Unknown tab '{tab}'. Allowed: {', '.join(allowed)}",
            code="UNKNOWN_TAB",
            details={"tab": tab, "allowed": allowed},
        )


class InvalidPageError(ValidationError):
    """Raised for page numbers below 1."""

    def __init__(self, page: int):
        super().__init__(
            f"Page must be at least 1, got {page}",
            code="INVALID_PAGE",
            details={"page": page},
        )
