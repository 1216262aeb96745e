"""
Roles module exceptions.
"""

from apartment_console.shared.exceptions import AuthorizationError


class InsufficientPermissionsError(AuthorizationError):
    """Raised when the current user lacks the role a command requires."""

    def __init__(self, required_role: str, user_role: str):
        super().__init__(
            f"Insufficient permissions. Required: {required_role}, has: {user_role}",
            code="INSUFFICIENT_PERMISSIONS",
            details={"required_role": required_role, "user_role": user_role},
        )
