"""Filtering and pagination shared by every list view.

``paginate`` applies filters, clamps the requested page into range and
slices out one page.  ``page_numbers`` builds the sequence of page links
shown under a list: every page when there are few, otherwise the first
and last page, the current page with its neighbours, and an ellipsis
marker for each elided run.

Callers must reset their requested page to 1 whenever a filter changes;
``ListQuery`` does this for them.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

Predicate = Callable[[Any], bool]

ELLIPSIS = "..."

# Largest page count shown without elision.
PUBLIC_FULL_WINDOW = 5
ADMIN_FULL_WINDOW = 7

ALL_CATEGORIES = "All"
SEARCH_FIELDS = ("title", "slug", "excerpt")


class Page(BaseModel, Generic[T]):
    """One page of a filtered list."""

    items: list[T]
    total_pages: int
    page: int
    page_size: int
    filtered_count: int
    page_numbers: list[int | str]

    @property
    def first_index(self) -> int:
        """1-based position of the first item shown, 0 when empty."""
        if not self.items:
            return 0
        return (self.page - 1) * self.page_size + 1

    @property
    def last_index(self) -> int:
        if not self.items:
            return 0
        return self.first_index + len(self.items) - 1

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def category_filter(category: str | None) -> Predicate:
    """Match items whose ``category`` equals *category*.

    ``None`` and ``"All"`` match everything.
    """
    if category is None or category == ALL_CATEGORIES:
        return lambda item: True
    return lambda item: _field(item, "category") == category


def search_filter(query: str | None, fields: Iterable[str] = SEARCH_FIELDS) -> Predicate:
    """Case-insensitive substring match on any of *fields*.

    A blank query matches everything.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return lambda item: True
    names = tuple(fields)

    def _matches(item: Any) -> bool:
        for name in names:
            value = _field(item, name)
            if isinstance(value, str) and needle in value.lower():
                return True
        return False

    return _matches


def apply_filters(items: Iterable[T], filters: Sequence[Predicate]) -> list[T]:
    """Keep items that satisfy every predicate, applied in order."""
    result = list(items)
    for predicate in filters:
        result = [item for item in result if predicate(item)]
    return result


def total_pages_for(count: int, page_size: int) -> int:
    """Number of pages for *count* items; never less than 1."""
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return max(1, math.ceil(count / page_size))


def clamp_page(requested: int, total_pages: int) -> int:
    return min(max(requested, 1), total_pages)


def page_numbers(current: int, total_pages: int, full_window: int = PUBLIC_FULL_WINDOW) -> list[int | str]:
    """Return page links for a pager, e.g. ``[1, "...", 4, 5, 6, "...", 42]``."""
    if total_pages <= full_window:
        return list(range(1, total_pages + 1))

    shown = sorted(
        {1, total_pages}
        | {p for p in (current - 1, current, current + 1) if 1 <= p <= total_pages}
    )
    sequence: list[int | str] = []
    previous = 0
    for number in shown:
        if previous and number - previous > 1:
            sequence.append(ELLIPSIS)
        sequence.append(number)
        previous = number
    return sequence


def paginate(
    items: Sequence[T],
    filters: Sequence[Predicate] = (),
    page_size: int = 9,
    requested_page: int = 1,
    *,
    full_window: int = PUBLIC_FULL_WINDOW,
) -> Page[T]:
    """Filter *items* and return the page closest to *requested_page*.

    Args:
        items: The full, ordered item list.
        filters: Predicates combined with AND, applied in order.
        page_size: Items per page; must be positive.
        requested_page: Any integer; it is clamped into ``[1, total_pages]``.
        full_window: Page counts up to this are listed without elision
            (``PUBLIC_FULL_WINDOW`` or ``ADMIN_FULL_WINDOW``).

    Returns:
        A Page holding the page's items and the pager sequence.
    """
    filtered = apply_filters(items, filters)
    total = total_pages_for(len(filtered), page_size)
    page = clamp_page(requested_page, total)
    start = (page - 1) * page_size
    return Page[Any](
        items=filtered[start:start + page_size],
        total_pages=total,
        page=page,
        page_size=page_size,
        filtered_count=len(filtered),
        page_numbers=page_numbers(page, total, full_window),
    )


class ListQuery(BaseModel):
    """Category/search/page state of a list view.

    Changing a filter always returns a query on page 1, so a narrowed
    result set never lands the caller beyond its last page.
    """

    category: str | None = None
    search: str = ""
    page: int = 1

    def with_category(self, category: str | None) -> ListQuery:
        return self.model_copy(update={"category": category, "page": 1})

    def with_search(self, search: str) -> ListQuery:
        return self.model_copy(update={"search": search, "page": 1})

    def with_page(self, page: int) -> ListQuery:
        return self.model_copy(update={"page": page})

    def filters(self, search_fields: Iterable[str] = SEARCH_FIELDS) -> list[Predicate]:
        return [category_filter(self.category), search_filter(self.search, search_fields)]

    def run(
        self,
        items: Sequence[T],
        page_size: int,
        *,
        full_window: int = PUBLIC_FULL_WINDOW,
        search_fields: Iterable[str] = SEARCH_FIELDS,
    ) -> Page[T]:
        return paginate(
            items,
            self.filters(search_fields),
            page_size,
            self.page,
            full_window=full_window,
        )


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)
