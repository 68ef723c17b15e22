"""
Pagination helper that computes page counts and offsets, e.g. for the
``LIMIT``/``OFFSET`` of a database query.
"""

import math
from typing import Dict, Union

from .value import clamp


def _check_int(value, name: str, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ValueError(f"{name} must be an integer >= {minimum}, got {value!r}")


class Pagination:
    """
    Tracks the current page of a paginated collection.

    Args:
        items_per_page (int): Number of items shown on each page.

    Examples:

        .. code-block:: python

            pages = Pagination(10)
            pages.set_total(95)
            pages.set_page(3)
            pages.offset   # 20
            pages.total    # 10
    """

    def __init__(self, items_per_page: int) -> None:
        _check_int(items_per_page, "items_per_page", 1)
        self._items_per_page = items_per_page
        self._current_page = 1
        self._total_items = 0
        self._total_pages = 0

    @property
    def current(self) -> int:
        return self._current_page

    @property
    def total(self) -> int:
        return self._total_pages

    @property
    def total_items(self) -> int:
        return self._total_items

    @property
    def offset(self) -> int:
        """Index of the first item on the current page."""
        return self._items_per_page * (self._current_page - 1)

    @property
    def number(self) -> int:
        return self._items_per_page

    def set_total(self, total: int) -> bool:
        """
        Set the total number of items in the paginated collection.

        Returns:
            Whether the current page had to move back because it no longer exists.
        """
        _check_int(total, "total", 0)
        self._total_items = total
        self._total_pages = math.ceil(total / self._items_per_page)

        last_page = max(self._total_pages, 1)
        if self._current_page > last_page:
            self._current_page = last_page
            return True
        return False

    def set_page(self, page: int) -> None:
        """Move to ``page``, clamped to the existing pages."""
        if isinstance(page, bool) or not isinstance(page, int):
            raise ValueError(f"page must be an integer, got {page!r}")
        self._current_page = clamp(page, 1, max(self._total_pages, 1))

    def get_info(self) -> Dict[str, Union[int, bool]]:
        """Information needed to render page links."""
        return {
            'current': self._current_page,
            'total': self._total_pages,
            'total_items': self._total_items,
            'offset': self.offset,
            'number': self._items_per_page,
            'has_prev': self._current_page > 1,
            'has_next': self._current_page < self._total_pages,
        }


def compute_page_info(
    items_per_page: int, total_items: int, requested_page: int
) -> Dict[str, Union[int, bool]]:
    """Page information for ``requested_page`` of a collection of ``total_items``."""
    pages = Pagination(items_per_page)
    pages.set_total(total_items)
    pages.set_page(requested_page)
    return pages.get_info()
