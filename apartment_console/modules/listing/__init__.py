"""
Listing module.

Search, category tabs, sorting and pagination for the console tables.
"""

from .models import ListView, SortDirection
from .exceptions import InvalidPageError, UnknownSortFieldError, UnknownTabError
from .controller import ALL_TAB, DEFAULT_PAGE_SIZE, ListController
from .presets import (
    CAN_INVOICE_TAB,
    CANNOT_INVOICE_TAB,
    apartment_list_controller,
    user_list_controller,
    available_role_tabs,
)

__all__ = [
    "ListView",
    "SortDirection",
    "InvalidPageError",
    "UnknownSortFieldError",
    "UnknownTabError",
    "ALL_TAB",
    "DEFAULT_PAGE_SIZE",
    "ListController",
    "CAN_INVOICE_TAB",
    "CANNOT_INVOICE_TAB",
    "apartment_list_controller",
    "user_list_controller",
    "available_role_tabs",
]
