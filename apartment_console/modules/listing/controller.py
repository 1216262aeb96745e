"""
List controller: search, category tabs, sorting and pagination over an
in-memory collection.

The derived view is recomputed from the current state on every access,
always through the same pipeline: search filter, tab filter, sort, page.
"""

import math
from typing import Any, Callable, Generic, Iterable, Mapping, Optional, Sequence, TypeVar

from .exceptions import InvalidPageError, UnknownSortFieldError, UnknownTabError
from .models import ListView, SortDirection


T = TypeVar("T")

SearchField = Callable[[T], Any]
TabPredicate = Callable[[T], bool]
SortKey = Callable[[T], Any]

ALL_TAB = "all"
DEFAULT_PAGE_SIZE = 10


class ListController(Generic[T]):
    """
    Filter/sort/paginate state for one list screen.

    Changing the search term, the tab or the sort resets the current page
    to 1. Sorting is stable, so records with equal keys keep input order.
    """

    def __init__(
        self,
        items: Iterable[T],
        *,
        search_fields: Sequence[SearchField],
        sort_keys: Mapping[str, SortKey],
        tabs: Optional[Mapping[str, TabPredicate]] = None,
        default_sort: str = "name",
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        if default_sort not in sort_keys:
            raise UnknownSortFieldError(default_sort, list(sort_keys))
        self._items: list[T] = list(items)
        self._search_fields = list(search_fields)
        self._sort_keys = dict(sort_keys)
        self._tabs = dict(tabs or {})
        self._page_size = max(1, page_size)

        self.search_term = ""
        self.active_tab = ALL_TAB
        self.sort_field = default_sort
        self.sort_direction = SortDirection.ASC
        self.current_page = 1

    # State changes

    @property
    def items(self) -> list[T]:
        return list(self._items)

    def set_items(self, items: Iterable[T]) -> None:
        """Replace the underlying collection (e.g. after a delete)."""
        self._items = list(items)

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def tab_names(self) -> list[str]:
        return [ALL_TAB, *self._tabs]

    @property
    def sort_fields(self) -> list[str]:
        return list(self._sort_keys)

    def set_search(self, term: Optional[str]) -> None:
        self.search_term = term or ""
        self.current_page = 1

    def set_tab(self, tab: str) -> None:
        if tab != ALL_TAB and tab not in self._tabs:
            raise UnknownTabError(tab, self.tab_names)
        self.active_tab = tab
        self.current_page = 1

    def sort_by(self, field: str) -> None:
        """Sort by field; the same field again flips the direction."""
        if field not in self._sort_keys:
            raise UnknownSortFieldError(field, self.sort_fields)
        if field == self.sort_field:
            self.sort_direction = self.sort_direction.toggled()
        else:
            self.sort_field = field
            self.sort_direction = SortDirection.ASC
        self.current_page = 1

    def set_page(self, page: int) -> None:
        if page < 1:
            raise InvalidPageError(page)
        self.current_page = page

    # Pipeline

    def _matches_search(self, item: T) -> bool:
        if not self.search_term:
            return True
        needle = self.search_term.lower()
        for field in self._search_fields:
            value = field(item)
            if value is None:
                continue
            if needle in str(value).lower():
                return True
        return False

    def _matches_tab(self, item: T) -> bool:
        if self.active_tab == ALL_TAB:
            return True
        return self._tabs[self.active_tab](item)

    @property
    def filtered(self) -> list[T]:
        """Searched, tab-filtered and sorted records (all pages)."""
        matching = [
            item for item in self._items
            if self._matches_search(item) and self._matches_tab(item)
        ]
        return sorted(
            matching,
            key=self._sort_keys[self.sort_field],
            reverse=self.sort_direction is SortDirection.DESC,
        )

    @property
    def total_items(self) -> int:
        return len(self.filtered)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self._page_size)

    @property
    def start_index(self) -> int:
        return (self.current_page - 1) * self._page_size

    @property
    def page_items(self) -> list[T]:
        """Records of the current page; empty when the page is out of range."""
        start = self.start_index
        return self.filtered[start : start + self._page_size]

    def view(self) -> ListView:
        filtered = self.filtered
        start = self.start_index
        return ListView(
            items=filtered[start : start + self._page_size],
            current_page=self.current_page,
            page_size=self._page_size,
            total_items=len(filtered),
            total_pages=math.ceil(len(filtered) / self._page_size),
            start_index=start,
            sort_field=self.sort_field,
            sort_direction=self.sort_direction,
            active_tab=self.active_tab,
            search_term=self.search_term,
        )
