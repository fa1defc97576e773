"""Tests for the advocates command line interface."""

from __future__ import annotations

import pytest
from sqlalchemy.engine import Engine
from typer.testing import CliRunner

from src.advocates.client.api_client import AdvocatesApiError
from src.advocates.core.services import DbSessionService
from src.advocates.entities.advocate import AdvocateRepository
from src.advocates.entities.advocate.dto import AdvocateListResponse
from src.advocates.entities.advocate.filters import AdvocateFilter
from src.cli import app, db_commands, search_commands
from tests.utils import advocate_payload, list_payload

runner = CliRunner()


class _SharedDatabase(DbSessionService):
    """Keeps the in-memory test database alive across commands."""

    def dispose(self) -> None:
        pass


@pytest.fixture
def shared_database(engine: Engine, monkeypatch: pytest.MonkeyPatch) -> DbSessionService:
    database = _SharedDatabase(engine=engine)
    monkeypatch.setattr(db_commands, "DbSessionService", lambda: database)
    return database


class TestDatabaseCommands:
    def test_init_db(self, shared_database: DbSessionService):
        result = runner.invoke(app, ["init-db"])

        assert result.exit_code == 0
        assert "Database tables are ready" in result.output

    def test_seed_then_seed_again(self, shared_database: DbSessionService):
        first = runner.invoke(app, ["seed"])

        assert first.exit_code == 0
        assert "Seeded 15 advocates" in first.output

        second = runner.invoke(app, ["seed"])

        assert second.exit_code == 1
        assert "already seeded" in second.output
        assert AdvocateRepository(shared_database).count() == 15


class TestSearchCommand:
    def test_renders_a_page(self, monkeypatch: pytest.MonkeyPatch):
        seen: list[AdvocateFilter] = []

        async def fake_fetch(base_url, filters):
            seen.append(filters)
            payload = list_payload(filters, 25)
            payload["data"][0] = advocate_payload(11, firstName="Priya", lastName="Desai")
            return AdvocateListResponse.model_validate(payload)

        monkeypatch.setattr(search_commands, "_fetch", fake_fetch)

        result = runner.invoke(
            app, ["search", "desai", "--page", "2"], env={"COLUMNS": "200"}
        )

        assert result.exit_code == 0
        assert seen == [AdvocateFilter(search="desai", limit=10, offset=10)]
        assert "Priya" in result.output
        assert "25 results" in result.output

    def test_filters_are_forwarded(self, monkeypatch: pytest.MonkeyPatch):
        seen: list[AdvocateFilter] = []

        async def fake_fetch(base_url, filters):
            seen.append(filters)
            return AdvocateListResponse.model_validate(list_payload(filters, 0))

        monkeypatch.setattr(search_commands, "_fetch", fake_fetch)

        result = runner.invoke(
            app,
            ["search", "--city", "Austin", "--specialty", "Bipolar", "--min-years", "3"],
        )

        assert result.exit_code == 0
        assert "No advocates found" in result.output
        assert seen[0].city == "Austin"
        assert seen[0].specialty == "Bipolar"
        assert seen[0].min_years_of_experience == 3
        assert seen[0].search is None

    def test_api_errors_exit_non_zero(self, monkeypatch: pytest.MonkeyPatch):
        async def fake_fetch(base_url, filters):
            raise AdvocatesApiError(
                "Failed to fetch advocates: Service Unavailable", status_code=503
            )

        monkeypatch.setattr(search_commands, "_fetch", fake_fetch)

        result = runner.invoke(app, ["search"])

        assert result.exit_code == 1
        assert "Failed to fetch advocates" in result.output

    def test_page_must_be_positive(self):
        result = runner.invoke(app, ["search", "--page", "0"])

        assert result.exit_code == 2


@pytest.mark.parametrize(
    "phone,expected",
    [(5551234567, "(555) 123-4567"), (12345, "12345")],
)
def test_format_phone(phone: int, expected: str):
    assert search_commands.format_phone(phone) == expected


def test_page_caption_shows_links_around_the_current_page():
    result = AdvocateListResponse.model_validate(
        list_payload(AdvocateFilter(limit=10, offset=40), 100)
    )

    table = search_commands.render_page(result, 5, None)

    assert table.caption == "100 results  1 … 4 [bold]5[/bold] 6 … 10"
    assert table.title == "Advocates"
