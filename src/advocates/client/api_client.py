"""HTTP client for the advocates API.

Every non-2xx answer becomes an ``AdvocatesApiError``; transport failures
are logged and re-raised unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx
from loguru import logger

from src.advocates.entities.advocate.dto import (
    AdvocateDetailResponse,
    AdvocateListResponse,
    AdvocateResponse,
)
from src.advocates.entities.advocate.filters import AdvocateFilter


class AdvocatesApiError(Exception):
    """The API answered with a non-success status or an unreadable body."""

    def __init__(
        self, message: str, *, status_code: int | None = None, status_text: str = ""
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.status_text = status_text


def query_params(filters: AdvocateFilter | Mapping[str, Any] | None) -> dict[str, Any]:
    """Only the filter keys that have a value, under their wire names."""
    if filters is None:
        return {}
    if isinstance(filters, AdvocateFilter):
        return filters.to_query_params()
    return {key: value for key, value in filters.items() if value is not None}


class AdvocatesApiClient:
    """Typed async access to ``/api/advocates``."""

    def __init__(
        self,
        base_url: str,
        *,
        resource_path: str = "/api/advocates",
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._resource_path = resource_path
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url, timeout=timeout
        )

    async def __aenter__(self) -> AdvocatesApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def list_advocates(
        self, filters: AdvocateFilter | Mapping[str, Any] | None = None
    ) -> AdvocateListResponse:
        """Fetch one page of advocates matching ``filters``."""
        response = await self._get(
            self._resource_path, "advocates", params=query_params(filters)
        )
        return self._parse(response, AdvocateListResponse, "advocates")

    async def get_advocate(self, advocate_id: int) -> AdvocateResponse | None:
        """Fetch a single advocate, or ``None`` when it does not exist."""
        response = await self._get(
            f"{self._resource_path}/{advocate_id}", "advocate", allow_not_found=True
        )
        if response is None:
            return None
        return self._parse(response, AdvocateDetailResponse, "advocate").data

    async def _get(
        self,
        url: str,
        subject: str,
        *,
        params: dict[str, Any] | None = None,
        allow_not_found: bool = False,
    ) -> httpx.Response | None:
        try:
            response = await self._client.get(
                url,
                params=params or None,
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            logger.error("Error fetching {} from {}: {}", subject, url, exc)
            raise

        if response.is_success:
            return response
        if allow_not_found and response.status_code == 404:
            return None

        logger.warning(
            "Fetching {} failed with {} {}",
            subject,
            response.status_code,
            response.reason_phrase,
        )
        raise AdvocatesApiError(
            f"Failed to fetch {subject}: {response.reason_phrase}",
            status_code=response.status_code,
            status_text=response.reason_phrase,
        )

    @staticmethod
    def _parse(response: httpx.Response, model: type, subject: str):
        try:
            return model.model_validate(response.json())
        except ValueError as exc:  # undecodable JSON or a schema mismatch
            raise AdvocatesApiError(
                f"Failed to fetch {subject}: invalid response body",
                status_code=response.status_code,
                status_text=response.reason_phrase,
            ) from exc
