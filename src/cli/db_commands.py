"""Database CLI commands."""

import typer
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.advocates.core.services import DbManageService, DbSessionService
from src.advocates.entities.advocate import AdvocateRepository
from src.advocates.entities.advocate.seed_data import seed_advocates

from .utils import console


def init_db_command() -> None:
    """🗄️  Create the advocates table if it does not exist."""
    database = DbSessionService()
    try:
        DbManageService(database).create_all()
    except SQLAlchemyError as e:
        console.print(f"[red]❌ Failed to create tables: {e}[/red]")
        raise typer.Exit(code=1) from e
    finally:
        database.dispose()

    console.print("[green]✅ Database tables are ready[/green]")


def seed_command() -> None:
    """🌱 Insert the sample advocate records."""
    database = DbSessionService()
    try:
        DbManageService(database).create_all()
        inserted = AdvocateRepository(database).seed(seed_advocates())
    except IntegrityError as e:
        console.print(
            "[yellow]⚠️  Database already seeded: advocates may already exist[/yellow]"
        )
        raise typer.Exit(code=1) from e
    except SQLAlchemyError as e:
        console.print(f"[red]❌ Failed to seed database: {e}[/red]")
        raise typer.Exit(code=1) from e
    finally:
        database.dispose()

    console.print(f"[green]✅ Seeded {len(inserted)} advocates[/green]")
