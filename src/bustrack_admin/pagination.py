"""Paginated list state with pluggable fetch strategies.

Buses are downloaded in full and sliced locally; users are paged by the
server. Both go through :class:`PaginatedList`, which only differs in the
strategy it is given.
"""

from __future__ import annotations

import math
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """What a strategy hands back after loading one page."""

    items: list[T]
    current_page: int
    last_page: int
    total: int


class ClientSlicePagination(Generic[T]):
    """Fetch the whole collection once, then slice it per page."""

    def __init__(self, fetch_all: Callable[[], Awaitable[list[T]]], *, page_size: int = 5) -> None:
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self._fetch_all = fetch_all
        self.page_size: int | None = page_size

    async def load(self, page: int) -> PageResult[T]:
        return self.slice(list(await self._fetch_all()), page)

    def slice(self, items: list[T], page: int) -> PageResult[T]:
        size = self.page_size or 1
        last_page = math.ceil(len(items) / size)
        current = min(max(1, page), max(1, last_page))
        return PageResult(items=items, current_page=current, last_page=last_page, total=len(items))


class ServerPagePagination(Generic[T]):
    """Fetch one page at a time and trust the server's page counters."""

    def __init__(self, fetch_page: Callable[[int], Awaitable[PageResult[T]]]) -> None:
        self._fetch_page = fetch_page
        self.page_size: int | None = None

    async def load(self, page: int) -> PageResult[T]:
        return await self._fetch_page(max(1, page))


class PaginatedList(Generic[T]):
    """Items plus page position for one list view.

    ``items`` holds the whole collection for client-side slicing and the
    current page for server-side paging; ``page_items`` is always what the
    table shows.
    """

    def __init__(self, strategy: ClientSlicePagination[T] | ServerPagePagination[T]) -> None:
        self._strategy = strategy
        self.items: list[T] = []
        self.current_page = 1
        self.last_page = 0
        self.total = 0

    @property
    def page_size(self) -> int | None:
        return self._strategy.page_size

    @property
    def is_client_side(self) -> bool:
        return isinstance(self._strategy, ClientSlicePagination)

    @property
    def total_pages(self) -> int:
        return self.last_page

    @property
    def page_items(self) -> list[T]:
        size = self._strategy.page_size
        if size is None:
            return list(self.items)
        start = (self.current_page - 1) * size
        return self.items[start : start + size]

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.last_page

    @property
    def range_start(self) -> int:
        if not self.total:
            return 0
        size = self._strategy.page_size
        if size is None:
            return 1
        return (self.current_page - 1) * size + 1

    @property
    def range_end(self) -> int:
        size = self._strategy.page_size
        if size is None:
            return len(self.items)
        return min(self.current_page * size, self.total)

    async def load(self, page: int | None = None) -> None:
        """Fetch (or refetch) and apply the strategy's result."""
        result = await self._strategy.load(self.current_page if page is None else page)
        self._apply(result)

    async def go_to(self, page: int) -> None:
        if isinstance(self._strategy, ClientSlicePagination):
            self._apply(self._strategy.slice(self.items, page))
            return
        await self.load(page)

    async def next_page(self) -> None:
        if self.has_next:
            await self.go_to(self.current_page + 1)

    async def previous_page(self) -> None:
        if self.has_previous:
            await self.go_to(self.current_page - 1)

    # ------------------------------------------------------------------
    # Local (optimistic) mutations
    # ------------------------------------------------------------------

    def append(self, item: T) -> None:
        self.items = [*self.items, item]
        self._reslice(delta=1)

    def replace(self, predicate: Callable[[T], bool], update: Callable[[T], T]) -> bool:
        replaced = False
        updated: list[T] = []
        for item in self.items:
            if predicate(item):
                updated.append(update(item))
                replaced = True
            else:
                updated.append(item)
        self.items = updated
        return replaced

    def remove(self, predicate: Callable[[T], bool]) -> int:
        kept = [item for item in self.items if not predicate(item)]
        removed = len(self.items) - len(kept)
        self.items = kept
        if removed:
            self._reslice(delta=-removed)
        return removed

    def _reslice(self, *, delta: int) -> None:
        if isinstance(self._strategy, ClientSlicePagination):
            self._apply(self._strategy.slice(self.items, self.current_page))
        else:
            # Server page: keep its counters, only the total moves.
            self.total = max(0, self.total + delta)

    def _apply(self, result: PageResult[T]) -> None:
        self.items = list(result.items)
        self.current_page = result.current_page
        self.last_page = result.last_page
        self.total = result.total
