"""
Preconfigured list controllers for the apartment and user screens.
"""

from typing import Iterable

from apartment_console.shared.formatting import (
    format_short_date,
    parse_number,
    parse_timestamp,
)
from apartment_console.shared.models import Apartment, User
from apartment_console.modules.roles import ADMIN_ROLE, USER_ROLE, get_highest_role, role_key

from .controller import DEFAULT_PAGE_SIZE, ListController


# Apartment list

CAN_INVOICE_TAB = "canInvoice"
CANNOT_INVOICE_TAB = "cannotInvoice"


def _text(value: object) -> str:
    return str(value).lower() if value is not None else ""


def apartment_list_controller(
    apartments: Iterable[Apartment],
    page_size: int = DEFAULT_PAGE_SIZE,
) -> ListController[Apartment]:
    """Controller for the apartments table."""
    return ListController(
        apartments,
        search_fields=[
            lambda a: a.name,
            lambda a: a.id,
            lambda a: a.price_for_clean,
            lambda a: a.vat,
            lambda a: format_short_date(a.created_at),
        ],
        tabs={
            CAN_INVOICE_TAB: lambda a: a.can_faktura is True,
            CANNOT_INVOICE_TAB: lambda a: a.can_faktura is False,
        },
        sort_keys={
            "name": lambda a: _text(a.name),
            "id": lambda a: a.id or 0,
            "price_for_clean": lambda a: parse_number(a.price_for_clean),
            "vat": lambda a: parse_number(a.vat),
            "created_at": lambda a: parse_timestamp(a.created_at),
            "can_faktura": lambda a: bool(a.can_faktura),
        },
        default_sort="name",
        page_size=page_size,
    )


# User list

def user_list_controller(
    users: Iterable[User],
    page_size: int = DEFAULT_PAGE_SIZE,
) -> ListController[User]:
    """Controller for the users table; "name" sorts by "name surname"."""
    return ListController(
        users,
        search_fields=[
            lambda u: u.name,
            lambda u: u.surname,
            lambda u: u.email,
            lambda u: u.username,
            lambda u: u.id,
            lambda u: " ".join(u.roles),
            lambda u: format_short_date(u.created_at),
            lambda u: " ".join(u.apartment_names),
        ],
        tabs={
            ADMIN_ROLE: lambda u: role_key(u.roles) == ADMIN_ROLE,
            USER_ROLE: lambda u: role_key(u.roles) == USER_ROLE,
        },
        sort_keys={
            "name": lambda u: f"{u.name} {u.surname}".lower(),
            "surname": lambda u: _text(u.surname),
            "email": lambda u: _text(u.email),
            "username": lambda u: _text(u.username),
            "id": lambda u: u.id or 0,
            "role": lambda u: get_highest_role(u.roles),
            "created_at": lambda u: parse_timestamp(u.created_at),
        },
        default_sort="name",
        page_size=page_size,
    )


def available_role_tabs(users: Iterable[User]) -> list[str]:
    """Role tabs that contain at least one user, admins first."""
    present = {role_key(u.roles) for u in users}
    return [role for role in (ADMIN_ROLE, USER_ROLE) if role in present]
