"""
Listing module data models.
"""

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field


T = TypeVar("T")


class SortDirection(str, Enum):
    """Sort order of a list view."""

    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class ListView(BaseModel, Generic[T]):
    """
    One rendered page of a list, plus pagination metadata.

    Produced by ListController.view() for the console tables.
    """

    items: list[T] = Field(default_factory=list)
    current_page: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1)
    total_items: int = Field(0, ge=0)
    total_pages: int = Field(0, ge=0)
    start_index: int = Field(0, ge=0)
    sort_field: str = "name"
    sort_direction: SortDirection = SortDirection.ASC
    active_tab: str = "all"
    search_term: str = ""
