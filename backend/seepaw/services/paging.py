"""Paging — runs a list query as COUNT + one page, returning a PagedList."""

from typing import Callable

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from seepaw.core.pagination import PagedList, offset_for


async def fetch_page(
    db: AsyncSession, query: Select, page: int, size: int, mapper: Callable,
) -> PagedList:
    """`query` must already carry its ORDER BY; it is dropped only for the count."""
    total = await db.scalar(
        select(func.count()).select_from(query.order_by(None).subquery()),
    )
    result = await db.execute(query.offset(offset_for(page, size)).limit(size))
    rows = result.scalars().unique().all()
    return PagedList(
        items=[mapper(row) for row in rows],
        current_page=page,
        page_size=size,
        total_count=total or 0,
    )
