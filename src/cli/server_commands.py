"""API server command."""

import typer
from rich.panel import Panel

from src.advocates.runtime.context import get_config

from .utils import console


def serve_command(
    host: str | None = typer.Option(None, help="Host to bind the server to"),
    port: int | None = typer.Option(None, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
    log_level: str = typer.Option(
        "info", help="Log level (debug, info, warning, error, critical)"
    ),
) -> None:
    """
    🚀 Start the advocates API server.

    Host and port default to the values in config.yaml.
    """
    import uvicorn

    app_config = get_config().app
    bind_host = host or app_config.host
    bind_port = port or app_config.port

    console.print(
        Panel.fit(
            f"[bold green]Starting advocates API on {bind_host}:{bind_port}[/bold green]",
            border_style="green",
        )
    )
    uvicorn.run(
        "src.advocates.api.http.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=log_level,
    )
