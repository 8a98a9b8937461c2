"""Shared Schemas — the paged envelope every list endpoint returns."""

from typing import Generic, TypeVar

from pydantic import BaseModel

from seepaw.core.pagination import PagedList

T = TypeVar("T")


class PagedResponse(BaseModel, Generic[T]):
    """One page of results — mirrors core.pagination.PagedList."""
    items: list[T]
    current_page: int
    total_pages: int
    page_size: int
    total_count: int

    @classmethod
    def from_paged(cls, paged: PagedList) -> "PagedResponse[T]":
        return cls(
            items=paged.items,
            current_page=paged.current_page,
            total_pages=paged.total_pages,
            page_size=paged.page_size,
            total_count=paged.total_count,
        )
