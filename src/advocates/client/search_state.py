"""Search box and pagination state for an advocate listing view.

Holds the raw search text, its debounced value and the current page, and
issues list queries as they change. Runs on the asyncio event loop; the
debounce timer is the only wait before a query is issued.
"""

from __future__ import annotations

import asyncio
import math
from collections.abc import Callable
from typing import Any, Literal, Protocol

from loguru import logger

from src.advocates.entities.advocate.dto import AdvocateListResponse, AdvocateResponse
from src.advocates.entities.advocate.filters import AdvocateFilter

PageLink = int | Literal["ellipsis"]


class ListQueries(Protocol):
    async def list_advocates(self, filters: AdvocateFilter | None = None) -> AdvocateListResponse:
        ...


class Debouncer:
    """Call ``callback(value)`` once ``delay`` seconds pass without a newer value."""

    def __init__(self, delay: float, callback: Callable[[Any], None]) -> None:
        self._delay = delay
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def push(self, value: Any) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._delay, self._fire, value)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, value: Any) -> None:
        self._handle = None
        self._callback(value)


def visible_pages(current_page: int, total_pages: int) -> list[PageLink]:
    """Page links to show: first, last, the neighbours of the current page.

    Gaps are marked with ``"ellipsis"``. Nothing is shown for a single page.
    """
    if total_pages <= 1:
        return []

    pages: list[PageLink] = [1]
    if current_page > 3:
        pages.append("ellipsis")

    start = max(2, current_page - 1)
    end = min(total_pages - 1, current_page + 1)
    pages.extend(range(start, end + 1))

    if current_page < total_pages - 2:
        pages.append("ellipsis")
    if total_pages not in pages:
        pages.append(total_pages)
    return pages


class AdvocateSearch:
    """State behind a searchable, paginated advocate table."""

    def __init__(
        self,
        queries: ListQueries,
        *,
        debounce_delay: float = 0.3,
        page_size: int = 10,
    ) -> None:
        self._queries = queries
        self._page_size = page_size
        self._debouncer = Debouncer(debounce_delay, self._apply_debounced)
        self._tasks: set[asyncio.Task] = set()
        self._listeners: list[Callable[[AdvocateSearch], None]] = []

        self.search_term = ""
        self.debounced_term = ""
        self.current_page = 1
        self.result: AdvocateListResponse | None = None
        self.error: Exception | None = None
        self.is_loading = False

    # --- derived state ---
    @property
    def search_query(self) -> str:
        return self.debounced_term

    @property
    def has_active_search(self) -> bool:
        return bool(self.debounced_term.strip())

    @property
    def filters(self) -> AdvocateFilter:
        """Filter for the current debounced text and page."""
        return AdvocateFilter(
            search=self.debounced_term.strip() or None,
            limit=self._page_size,
            offset=(self.current_page - 1) * self._page_size,
        )

    @property
    def request_key(self) -> tuple[str, int]:
        return (self.debounced_term.strip(), self.current_page)

    @property
    def advocates(self) -> list[AdvocateResponse]:
        return self.result.data if self.result is not None else []

    @property
    def total(self) -> int:
        return self.result.pagination.total if self.result is not None else 0

    @property
    def total_pages(self) -> int:
        if self.result is None:
            return 0
        return math.ceil(self.result.pagination.total / self.result.pagination.limit)

    @property
    def visible_pages(self) -> list[PageLink]:
        return visible_pages(self.current_page, self.total_pages)

    # --- transitions ---
    def subscribe(self, listener: Callable[[AdvocateSearch], None]) -> None:
        """Register a callback run after every state change."""
        self._listeners.append(listener)

    def start(self) -> asyncio.Task:
        """Issue the initial, unfiltered query."""
        return self.refresh()

    def set_search_term(self, text: str) -> None:
        self.search_term = text
        self._debouncer.push(text)
        if self.current_page != 1:
            self.current_page = 1
            self.refresh()
        else:
            self._notify()

    def set_page(self, page: int) -> asyncio.Task:
        if self.total_pages <= 1 or not 1 <= page <= self.total_pages:
            raise ValueError(f"Page {page} is outside 1..{self.total_pages}")
        self.current_page = page
        return self.refresh()

    def reset(self) -> asyncio.Task:
        self._debouncer.cancel()
        self.search_term = ""
        self.debounced_term = ""
        self.current_page = 1
        return self.refresh()

    def refresh(self) -> asyncio.Task:
        """Query the current filter in the background."""
        key = self.request_key
        filters = self.filters
        self.is_loading = True
        self._notify()

        task = asyncio.ensure_future(self._load(key, filters))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_idle(self) -> None:
        """Wait for every in-flight query (test and CLI helper)."""
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def _apply_debounced(self, value: str) -> None:
        if value == self.debounced_term:
            return
        self.debounced_term = value
        self.current_page = 1
        self.refresh()

    async def _load(self, key: tuple[str, int], filters: AdvocateFilter) -> None:
        try:
            result = await self._queries.list_advocates(filters)
        except Exception as exc:
            if key != self.request_key:
                return
            logger.warning("Advocate search for {} failed: {}", key, exc)
            self.result = None
            self.error = exc
            self.is_loading = False
            self._notify()
            return

        if key != self.request_key:
            logger.debug("Discarding response for superseded query {}", key)
            return
        self.result = result
        self.error = None
        self.is_loading = False
        self._notify()

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self)
