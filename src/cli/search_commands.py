"""Search the advocates directory through the HTTP API."""

import asyncio
import math

import httpx
import typer
from rich.table import Table

from src.advocates.client.api_client import AdvocatesApiError
from src.advocates.client.queries import AdvocateQueries
from src.advocates.client.search_state import visible_pages
from src.advocates.entities.advocate.dto import AdvocateListResponse
from src.advocates.entities.advocate.filters import AdvocateFilter
from src.advocates.runtime.context import get_config

from .utils import console


def format_phone(phone_number: int) -> str:
    digits = str(phone_number)
    if len(digits) != 10:
        return digits
    return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"


def render_page(result: AdvocateListResponse, page: int, search: str | None) -> Table:
    pagination = result.pagination
    total_pages = math.ceil(pagination.total / pagination.limit)
    title = f"Advocates matching '{search}'" if search else "Advocates"

    table = Table(title=title, caption=_page_caption(page, total_pages, pagination.total))
    table.add_column("First Name", style="green")
    table.add_column("Last Name", style="green")
    table.add_column("City", style="cyan")
    table.add_column("Degree", style="magenta")
    table.add_column("Specialties", style="blue")
    table.add_column("Years", justify="right", style="yellow")
    table.add_column("Phone")

    for advocate in result.data:
        table.add_row(
            advocate.first_name,
            advocate.last_name,
            advocate.city,
            advocate.degree,
            ", ".join(advocate.specialties),
            str(advocate.years_of_experience),
            format_phone(advocate.phone_number),
        )
    return table


def _page_caption(page: int, total_pages: int, total: int) -> str:
    links = " ".join(
        "…" if link == "ellipsis" else f"[bold]{link}[/bold]" if link == page else str(link)
        for link in visible_pages(page, total_pages)
    )
    summary = f"{total} result{'s' if total != 1 else ''}"
    return f"{summary}  {links}" if links else summary


async def _fetch(base_url: str | None, filters: AdvocateFilter) -> AdvocateListResponse:
    client_config = get_config().client
    if base_url:
        client_config = client_config.model_copy(update={"base_url": base_url})

    queries = AdvocateQueries.from_config(client_config)
    try:
        return await queries.list_advocates(filters)
    finally:
        await queries.aclose()


def search_command(
    text: str | None = typer.Argument(None, help="Free text matched against any field"),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number to show"),
    city: str | None = typer.Option(None, "--city", help="City contains this text"),
    degree: str | None = typer.Option(None, "--degree", help="Exact degree"),
    specialty: str | None = typer.Option(None, "--specialty", help="Exact specialty"),
    min_years: int | None = typer.Option(
        None, "--min-years", min=0, help="Minimum years of experience"
    ),
    base_url: str | None = typer.Option(
        None, "--base-url", help="API base URL (defaults to client.base_url)"
    ),
) -> None:
    """🔎 Search advocates and print one page of results."""
    page_size = get_config().client.page_size
    filters = AdvocateFilter(
        search=text,
        city=city,
        degree=degree,
        specialty=specialty,
        min_years_of_experience=min_years,
        limit=page_size,
        offset=(page - 1) * page_size,
    )

    try:
        result = asyncio.run(_fetch(base_url, filters))
    except AdvocatesApiError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1) from e
    except httpx.HTTPError as e:
        console.print(f"[red]❌ Could not reach the advocates API: {e}[/red]")
        raise typer.Exit(code=1) from e

    if not result.data:
        console.print("[yellow]No advocates found[/yellow]")
        return

    console.print(render_page(result, page, filters.search))
