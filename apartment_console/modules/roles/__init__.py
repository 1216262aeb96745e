"""
Roles module.

Maps role lists to display labels and admin checks.
"""

from .policy import (
    ADMIN_ROLE,
    USER_ROLE,
    ADMIN_LABEL,
    USER_LABEL,
    get_highest_role,
    is_admin,
    has_role,
    role_key,
    require_admin,
)
from .exceptions import InsufficientPermissionsError

__all__ = [
    "ADMIN_ROLE",
    "USER_ROLE",
    "ADMIN_LABEL",
    "USER_LABEL",
    "get_highest_role",
    "is_admin",
    "has_role",
    "role_key",
    "require_admin",
    "InsufficientPermissionsError",
]
