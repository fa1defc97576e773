"""Keyed cache for client queries with freshness and eviction windows.

An entry is *fresh* for ``stale_time`` seconds after it was fetched and is
served without a request. After that it is *stale*: the next read refetches.
Entries nobody has read for ``gc_time`` seconds are evicted. Failures are
never cached.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass
from typing import Any, TypeVar

from cachetools import TTLCache
from loguru import logger
from pydantic import BaseModel

from src.advocates.runtime.config.config_data import deep_freeze

T = TypeVar("T")


@dataclass
class _CacheEntry:
    value: Any
    fetched_at: float


def freeze_key(key: Any) -> Hashable:
    """Turn a query key (tuples, dicts, filter models) into a hashable value."""
    if isinstance(key, BaseModel):
        return deep_freeze(key.model_dump(by_alias=True, exclude_none=True))
    if isinstance(key, (list, tuple)):
        return tuple(freeze_key(part) for part in key)
    return deep_freeze(key)


class QueryCache:
    def __init__(
        self,
        stale_time: float = 60.0,
        gc_time: float = 300.0,
        maxsize: int = 128,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._stale_time = stale_time
        self._timer = timer
        self._entries: TTLCache[Hashable, _CacheEntry] = TTLCache(
            maxsize=maxsize, ttl=gc_time, timer=timer
        )
        self._in_flight: dict[Hashable, asyncio.Task] = {}

    def __contains__(self, key: Any) -> bool:
        return freeze_key(key) in self._entries

    def __len__(self) -> int:
        self._entries.expire()
        return len(self._entries)

    def is_fresh(self, key: Any) -> bool:
        entry = self._entries.get(freeze_key(key))
        return entry is not None and self._timer() - entry.fetched_at < self._stale_time

    def get(self, key: Any) -> Any | None:
        """Return the cached value (fresh or stale) without fetching."""
        entry = self._entries.get(freeze_key(key))
        return entry.value if entry is not None else None

    async def fetch(self, key: Any, fetcher: Callable[[], Awaitable[T]]) -> T:
        """Return the cached value for ``key`` or run ``fetcher``.

        Concurrent calls for the same key share one request.
        """
        frozen = freeze_key(key)
        entry = self._entries.get(frozen)
        if entry is not None:
            # Reading counts as activity, so push the eviction deadline out
            self._entries[frozen] = entry
            if self._timer() - entry.fetched_at < self._stale_time:
                return entry.value
            logger.debug("Query {} is stale; refetching", frozen)

        task = self._in_flight.get(frozen)
        if task is None:
            task = asyncio.ensure_future(self._load(frozen, fetcher))
            self._in_flight[frozen] = task
        return await asyncio.shield(task)

    async def _load(self, frozen: Hashable, fetcher: Callable[[], Awaitable[T]]) -> T:
        try:
            value = await fetcher()
        finally:
            self._in_flight.pop(frozen, None)
        self._entries[frozen] = _CacheEntry(value=value, fetched_at=self._timer())
        return value

    def invalidate(self, prefix: tuple = ()) -> int:
        """Drop every entry whose key starts with ``prefix``; return how many."""
        frozen_prefix = freeze_key(prefix)
        doomed = [
            key
            for key in list(self._entries.keys())
            if isinstance(key, tuple) and key[: len(frozen_prefix)] == frozen_prefix
        ]
        for key in doomed:
            self._entries.pop(key, None)
        return len(doomed)
