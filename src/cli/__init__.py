"""Main CLI application module."""

import typer

from src.advocates.api.utils.app_startup import configure_logging

from .db_commands import init_db_command, seed_command
from .search_commands import search_command
from .server_commands import serve_command

# Create the main CLI application
app = typer.Typer(
    help="🩺 Advocates CLI - run the API and browse the directory",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register commands
app.command(name="serve")(serve_command)
app.command(name="init-db")(init_db_command)
app.command(name="seed")(seed_command)
app.command(name="search")(search_command)


def main() -> None:
    """Main entry point for the CLI."""
    configure_logging()
    app()


if __name__ == "__main__":
    main()
