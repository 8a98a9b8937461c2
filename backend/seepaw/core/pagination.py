"""Pagination — page arithmetic shared by every list query.

Invariants:
    - Pages are 1-based
    - total_pages = ceil(total_count / page_size); 0 when there are no rows
    - check_page_bounds is PURE: returns a 400 Result on violation, None on success
"""

import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from seepaw.core.result import Result, bad_request

T = TypeVar("T")


@dataclass
class PagedList(Generic[T]):
    """One page of items plus the counters clients need to navigate."""
    items: list[T] = field(default_factory=list)
    current_page: int = 1
    page_size: int = 10
    total_count: int = 0

    @property
    def total_pages(self) -> int:
        return total_pages_for(self.total_count, self.page_size)

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1


def total_pages_for(total_count: int, page_size: int) -> int:
    if page_size <= 0:
        return 0
    return math.ceil(total_count / page_size)


def offset_for(page: int, page_size: int) -> int:
    """Row offset of the first item on `page`."""
    return (page - 1) * page_size


def check_page_bounds(page: int, page_size: int, max_size: int = 50) -> Result | None:
    if page < 1:
        return bad_request("Page number must be 1 or greater")
    if page_size < 1 or page_size > max_size:
        return bad_request(f"Page size must be between 1 and {max_size}")
    return None
