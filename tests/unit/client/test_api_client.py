"""Tests for the advocates HTTP client using httpx.MockTransport."""

from collections.abc import Callable

import httpx
import pytest

from src.advocates.client.api_client import (
    AdvocatesApiClient,
    AdvocatesApiError,
    query_params,
)
from src.advocates.entities.advocate.filters import AdvocateFilter
from tests.utils import advocate_payload, list_payload

Handler = Callable[[httpx.Request], httpx.Response]


def make_client(handler: Handler) -> AdvocatesApiClient:
    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://testserver"
    )
    return AdvocatesApiClient("http://testserver", http_client=http_client)


class TestQueryParams:
    def test_only_defined_values_are_sent(self):
        assert query_params({"search": "desai", "city": None}) == {"search": "desai"}

    def test_filter_uses_wire_names(self):
        params = query_params(
            AdvocateFilter(search="new york", min_years_of_experience=2, limit=5)
        )

        assert params == {
            "search": "new york",
            "minYearsOfExperience": 2,
            "limit": 5,
            "offset": 0,
        }

    def test_nothing_to_send(self):
        assert query_params(None) == {}
        assert query_params({}) == {}


class TestListAdvocates:
    @pytest.mark.asyncio
    async def test_parses_the_envelope(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=list_payload(AdvocateFilter(), 25))

        async with make_client(handler) as client:
            result = await client.list_advocates(AdvocateFilter(search="desai"))

        assert seen[0].url.path == "/api/advocates"
        assert dict(seen[0].url.params) == {"search": "desai", "limit": "10", "offset": "0"}
        assert seen[0].url.query == b"search=desai&limit=10&offset=0"
        assert len(result.data) == 10
        assert result.data[0].first_name == "Person01"
        assert result.pagination.total == 25
        assert result.pagination.has_more is True

    @pytest.mark.asyncio
    async def test_no_filters_means_no_query_string(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=list_payload(None, 0))

        async with make_client(handler) as client:
            result = await client.list_advocates()

        assert seen[0].url.query == b""
        assert result.data == []

    @pytest.mark.asyncio
    async def test_non_success_raises_with_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, json={"error": "Database connection error"})

        async with make_client(handler) as client:
            with pytest.raises(AdvocatesApiError) as exc_info:
                await client.list_advocates()

        assert exc_info.value.status_code == 503
        assert exc_info.value.status_text == "Service Unavailable"
        assert str(exc_info.value) == "Failed to fetch advocates: Service Unavailable"

    @pytest.mark.asyncio
    async def test_transport_errors_propagate_unchanged(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(httpx.ConnectError):
                await client.list_advocates()

    @pytest.mark.asyncio
    async def test_unreadable_body_is_an_api_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>not json</html>")

        async with make_client(handler) as client:
            with pytest.raises(AdvocatesApiError, match="invalid response body"):
                await client.list_advocates()


class TestGetAdvocate:
    @pytest.mark.asyncio
    async def test_found(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/advocates/7"
            return httpx.Response(200, json={"data": advocate_payload(7)})

        async with make_client(handler) as client:
            advocate = await client.get_advocate(7)

        assert advocate is not None
        assert advocate.id == 7
        assert advocate.phone_number == 5550000007

    @pytest.mark.asyncio
    async def test_missing_is_none(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"error": "Not found"})

        async with make_client(handler) as client:
            assert await client.get_advocate(99) is None

    @pytest.mark.asyncio
    async def test_bad_request_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"error": "Validation error"})

        async with make_client(handler) as client:
            with pytest.raises(AdvocatesApiError, match="Failed to fetch advocate: Bad Request"):
                await client.get_advocate(1)
