# luna/domain/policies/pagination.py
from __future__ import annotations

from typing import Callable, List, Sequence, Tuple, TypeVar

from luna.domain.dataclasses.pagination import Page, PageQuery

T = TypeVar("T")


def page_link(limit: int, offset: int) -> str:
    """Opaque query-string fragment; the HTTP layer owns the base path."""
    return f"?limit={limit}&offset={offset}"


def page_window(query: PageQuery) -> Tuple[int, int, int]:
    """
    Return (limit, page_index, row_offset) for database-side paging.

    The page index is offset // limit, so an offset that does not sit on a
    page boundary is rounded down to the start of its page.
    """
    limit = query.effective_limit
    page_index = query.effective_offset // limit
    return limit, page_index, page_index * limit


def build_db_page(query: PageQuery, total: int, results: List[T]) -> Page[T]:
    """
    Wrap one fetched page of rows. `results` must be the rows at
    page_window(query)'s row_offset; `total` is the unpaged row count.
    """
    limit, page_index, _ = page_window(query)
    nxt = page_link(limit, (page_index + 1) * limit) if (page_index + 1) * limit < total else None
    prev = page_link(limit, (page_index - 1) * limit) if page_index > 0 else None
    return Page(count=int(total), next=nxt, previous=prev, results=list(results))


def paginate_in_memory(items: Sequence[T], query: PageQuery) -> Page[T]:
    """
    Skip/take over a fully materialised list. For page-aligned offsets this
    yields the same count/next/previous/results as build_db_page.
    """
    limit = query.effective_limit
    offset = query.effective_offset
    total = len(items)
    nxt = page_link(limit, offset + limit) if offset + limit < total else None
    prev = page_link(limit, max(0, offset - limit)) if offset > 0 else None
    return Page(count=total, next=nxt, previous=prev, results=list(items[offset:offset + limit]))


def paginate_query(
    query: PageQuery,
    *,
    count: Callable[[], int],
    fetch: Callable[[int, int], List[T]],
) -> Page[T]:
    """
    Database-side paging over two callables: `count()` for the total and
    `fetch(row_offset, limit)` for the rows of the requested page.
    """
    limit, _, row_offset = page_window(query)
    total = count()
    rows = fetch(row_offset, limit) if row_offset < total else []
    return build_db_page(query, total, rows)
