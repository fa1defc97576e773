"""Cached advocate queries, keyed by the full filter."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from src.advocates.client.api_client import AdvocatesApiClient
from src.advocates.client.query_cache import QueryCache
from src.advocates.entities.advocate.dto import AdvocateListResponse, AdvocateResponse
from src.advocates.entities.advocate.filters import AdvocateFilter
from src.advocates.runtime.config.config_data import ClientConfig


class AdvocateQueryKeys:
    """Query keys used for cache lookups and invalidation."""

    all: tuple = ("advocates",)

    @classmethod
    def lists(cls) -> tuple:
        return (*cls.all, "list")

    @classmethod
    def list(cls, filters: AdvocateFilter | Mapping[str, Any] | None = None) -> tuple:
        return (*cls.lists(), filters)

    @classmethod
    def details(cls) -> tuple:
        return (*cls.all, "detail")

    @classmethod
    def detail(cls, advocate_id: int) -> tuple:
        return (*cls.details(), advocate_id)


class AdvocateQueries:
    def __init__(self, client: AdvocatesApiClient, cache: QueryCache | None = None) -> None:
        self._client = client
        self._cache = cache or QueryCache()

    @classmethod
    def from_config(cls, config: ClientConfig) -> AdvocateQueries:
        client = AdvocatesApiClient(config.base_url, timeout=config.timeout_seconds)
        cache = QueryCache(
            stale_time=config.stale_time_seconds,
            gc_time=config.gc_time_seconds,
            maxsize=config.cache_size,
        )
        return cls(client, cache)

    @property
    def cache(self) -> QueryCache:
        return self._cache

    async def list_advocates(
        self, filters: AdvocateFilter | Mapping[str, Any] | None = None
    ) -> AdvocateListResponse:
        return await self._cache.fetch(
            AdvocateQueryKeys.list(filters),
            lambda: self._client.list_advocates(filters),
        )

    async def get_advocate(self, advocate_id: int) -> AdvocateResponse | None:
        return await self._cache.fetch(
            AdvocateQueryKeys.detail(advocate_id),
            lambda: self._client.get_advocate(advocate_id),
        )

    async def aclose(self) -> None:
        await self._client.aclose()
