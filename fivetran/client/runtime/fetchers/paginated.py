"""Cursor pagination with next-page prefetch.

Architecture:
    PaginatedFetcher.fetch_page() retrieves and decodes one page.
    PaginatedFetcher.fetch_items() returns a PageIterator that flattens the
    cursor chain into a single ordered async sequence.

    PageIterator is a small state machine holding:
    - the current page's remaining items
    - a task for the in-flight next page

    When the buffer runs dry it awaits the held task and, if that page has a
    next cursor, starts the following fetch before yielding any of its items.
    Network latency of page N+1 thus overlaps consumption of page N, while
    items still surface strictly in page order. The chain is iterative, so
    long cursor chains do not grow the call stack.
"""

from __future__ import annotations

import asyncio
from collections import deque
from contextlib import suppress
from types import TracebackType
from typing import Generic, TypeVar
from urllib.parse import quote_plus

from ...config import PAGE_SIZE
from ...models.envelopes import PaginatedRoot
from ..telemetry import log_page_fetched
from .base import BaseFetcher, type_name

T = TypeVar("T")


def page_url(endpoint: str, cursor: str | None = None, limit: int = PAGE_SIZE) -> str:
    """Build the request URL for one page.

    Examples:
        >>> page_url("groups")
        'groups?limit=100'
        >>> page_url("groups", "a b/c")
        'groups?limit=100&cursor=a+b%2Fc'
    """
    separator = "&" if "?" in endpoint else "?"
    url = f"{endpoint}{separator}limit={limit}"
    if cursor is not None:
        url = f"{url}&cursor={quote_plus(cursor)}"
    return url


class PaginatedFetcher(BaseFetcher):
    """Fetches cursor-paginated collections."""

    async def fetch_page(
        self, endpoint: str, item_type: type[T], cursor: str | None = None
    ) -> PaginatedRoot[T]:
        """Fetch and decode one page.

        Raises:
            DecodeError: Body does not match the paginated envelope
            HTTPStatusError: Non-success status from the request handler
        """
        url = page_url(endpoint, cursor)
        response = await self.request_handler.get(url)
        return self.decode(
            response.text,
            PaginatedRoot[item_type],  # type: ignore[valid-type]
            endpoint=url,
            target=f"PaginatedRoot[{type_name(item_type)}]",
        )

    def fetch_items(self, endpoint: str, item_type: type[T]) -> PageIterator[T]:
        """Return a lazy, single-pass iterator over every item of the collection.

        A consumer that may stop before the end should iterate inside
        ``async with``: the prefetched page keeps its concurrency permit until
        ``aclose()`` cancels it or its request finishes on its own.
        """
        return PageIterator(self, endpoint, item_type)


def _retrieve_outcome(task: asyncio.Task) -> None:
    # Marks a failure as retrieved; awaiting the task still re-raises it
    if not task.cancelled():
        task.exception()


class PageIterator(Generic[T]):
    """Ordered async iterator over all items of a cursor chain.

    Usage:
        async for group in fetcher.fetch_items("groups", Group):
            ...

    Breaking out of the loop early should be followed by ``aclose()`` (or use
    ``async with``) so the prefetch task is cancelled.
    """

    def __init__(self, fetcher: PaginatedFetcher, endpoint: str, item_type: type[T]) -> None:
        self._fetcher = fetcher
        self._endpoint = endpoint
        self._item_type = item_type
        self._buffer: deque[T] = deque()
        self._pending: asyncio.Task[PaginatedRoot[T]] | None = None
        self._started = False
        self._finished = False
        self._page_index = 0

    def __aiter__(self) -> PageIterator[T]:
        return self

    async def __anext__(self) -> T:
        if self._finished:
            raise StopAsyncIteration
        if not self._started:
            self._started = True
            self._pending = self._start_fetch(None)

        try:
            while not self._buffer:
                if self._pending is None:
                    raise StopAsyncIteration
                page = await self._pending
                self._pending = None

                cursor = page.next_cursor
                if cursor is not None:
                    self._pending = self._start_fetch(cursor)

                log_page_fetched(
                    endpoint=self._endpoint,
                    page_index=self._page_index,
                    items=len(page.items),
                    has_next=cursor is not None,
                )
                self._page_index += 1
                self._buffer.extend(page.items)

            # Cancellation point between emitted items
            await asyncio.sleep(0)
        except BaseException:
            self._finished = True
            self._buffer.clear()
            self._cancel_pending()
            raise

        return self._buffer.popleft()

    def _start_fetch(self, cursor: str | None) -> asyncio.Task[PaginatedRoot[T]]:
        task = asyncio.create_task(
            self._fetcher.fetch_page(self._endpoint, self._item_type, cursor)
        )
        task.add_done_callback(_retrieve_outcome)
        return task

    def _cancel_pending(self) -> None:
        task, self._pending = self._pending, None
        if task is not None and not task.done():
            task.cancel()

    @property
    def prefetching(self) -> bool:
        """Whether a next-page fetch is currently held."""
        return self._pending is not None

    async def aclose(self) -> None:
        """Stop iteration and cancel any in-flight prefetch."""
        self._finished = True
        self._buffer.clear()
        task, self._pending = self._pending, None
        if task is None:
            return
        if not task.done():
            task.cancel()
        # Retrieve the outcome so an abandoned prefetch is not reported as unhandled
        with suppress(asyncio.CancelledError, Exception):
            await task

    async def __aenter__(self) -> PageIterator[T]:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()
