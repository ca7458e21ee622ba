"""Filtered, paginated list views."""

from insights.listing.paginate import (
    ADMIN_FULL_WINDOW,
    ELLIPSIS,
    PUBLIC_FULL_WINDOW,
    ListQuery,
    Page,
    category_filter,
    page_numbers,
    paginate,
    search_filter,
)

__all__ = [
    "ADMIN_FULL_WINDOW",
    "ELLIPSIS",
    "PUBLIC_FULL_WINDOW",
    "ListQuery",
    "Page",
    "category_filter",
    "page_numbers",
    "paginate",
    "search_filter",
]
