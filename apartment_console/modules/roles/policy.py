"""
Role policy.

Pure functions over a user's role list. They decide which commands and
views the console offers; the API enforces permissions on its own.
"""

from typing import Any

from .exceptions import InsufficientPermissionsError


ADMIN_ROLE = "ROLE_ADMIN"
USER_ROLE = "ROLE_USER"

ADMIN_LABEL = "Admin"
USER_LABEL = "User"


def get_highest_role(roles: Any) -> str:
    """
    Highest-privilege label for a role list.

    Admin has priority over User. Missing or malformed input gets the
    least-privileged label.
    """
    if not isinstance(roles, (list, tuple)):
        return USER_LABEL
    if ADMIN_ROLE in roles:
        return ADMIN_LABEL
    return USER_LABEL


def is_admin(roles: Any) -> bool:
    return get_highest_role(roles) == ADMIN_LABEL


def has_role(roles: Any, role: str) -> bool:
    if not isinstance(roles, (list, tuple)):
        return False
    return role in roles


def role_key(roles: Any) -> str:
    """Role constant matching the highest label (used as a list tab)."""
    return ADMIN_ROLE if is_admin(roles) else USER_ROLE


def require_admin(roles: Any) -> None:
    """Raise unless the role list grants admin access."""
    if not is_admin(roles):
        raise InsufficientPermissionsError(ADMIN_LABEL, get_highest_role(roles))
