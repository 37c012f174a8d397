from __future__ import annotations

import math
from dataclasses import dataclass, field

DEFAULT_PAGE_SIZE = 25
DEFAULT_PAGE_SIZE_OPTIONS = (10, 25, 50, 100)
ELLIPSIS = "..."


@dataclass
class PaginationState:
    """Page cursor for a listing.

    ``current_page`` always stays within ``1..max(1, total_pages)``; every
    mutator below is a no-op while ``loading`` is set.
    """

    current_page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_items: int = 0
    loading: bool = False
    page_size_options: tuple[int, ...] = field(default=DEFAULT_PAGE_SIZE_OPTIONS)

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be >= 1")
        self.total_items = max(0, self.total_items)
        self.current_page = self._clamp(self.current_page)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.page_size

    def _clamp(self, page: int) -> int:
        return min(max(1, page), max(1, self.total_pages))

    def set_page(self, page: int) -> bool:
        """Move to ``page``; returns whether the page changed."""
        if self.loading or page < 1 or page > self.total_pages or page == self.current_page:
            return False
        self.current_page = page
        return True

    def next_page(self) -> bool:
        return self.set_page(self.current_page + 1)

    def previous_page(self) -> bool:
        return self.set_page(self.current_page - 1)

    def first_page(self) -> bool:
        return self.set_page(1)

    def last_page(self) -> bool:
        return self.set_page(self.total_pages)

    def set_page_size(self, page_size: int) -> bool:
        if self.loading or page_size < 1 or page_size == self.page_size:
            return False
        self.page_size = page_size
        self.current_page = 1
        return True

    def set_total_items(self, total_items: int) -> None:
        self.total_items = max(0, total_items)
        self.current_page = self._clamp(self.current_page)

    def item_range(self) -> tuple[int, int]:
        """Bounds for "showing X to Y of Z"; ``(0, 0)`` when empty."""
        if self.total_items == 0:
            return 0, 0
        start = self.offset + 1
        end = min(self.current_page * self.page_size, self.total_items)
        return start, end

    def visible_pages(self, delta: int = 2) -> list[int | str]:
        return visible_pages(self.current_page, self.total_pages, delta=delta)

    def to_query(self) -> dict[str, int]:
        return {"page": self.current_page, "limit": self.page_size}


def visible_pages(current_page: int, total_pages: int, delta: int = 2) -> list[int | str]:
    """Page buttons to render: first, last, ``delta`` neighbours and ``...`` gaps."""
    if total_pages <= 1:
        return [1]

    window = range(max(2, current_page - delta), min(total_pages - 1, current_page + delta) + 1)
    pages: list[int | str] = [1]
    if current_page - delta > 2:
        pages.append(ELLIPSIS)
    pages.extend(window)
    if current_page + delta < total_pages - 1:
        pages.append(ELLIPSIS)
    pages.append(total_pages)

    deduped: list[int | str] = []
    for page in pages:
        if isinstance(page, int) and page in deduped:
            continue
        deduped.append(page)
    return deduped
