"""API server command."""

import click

from ..config import get_settings
from .base import ensure_initialized

UVICORN_LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


@click.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
@click.option("--port", "-p", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, help="Restart on code changes")
@click.option("--log-level", type=click.Choice(UVICORN_LOG_LEVELS),
              help="Server log level (default: ROUTINIZE_LOG_LEVEL)")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, reload: bool, log_level: str | None):
    """Start the JSON API server.

    Requires an initialized database (see 'routinize init').

    Examples:

        routinize serve

        routinize serve --host 0.0.0.0 --port 3000

        routinize serve --reload --log-level debug
    """
    ensure_initialized(ctx)

    import uvicorn

    settings = get_settings()
    log_level = log_level or settings.log_level.lower()
    base_url = f"http://{host}:{port}"

    click.echo(click.style(f"routinize API {settings.api_version}", fg="green"))
    click.echo(f"  API:     {base_url}/api")
    click.echo(f"  Docs:    {base_url}/docs")
    click.echo(f"  Health:  {base_url}/health")
    click.echo(f"  Data:    {settings.db_path}")
    click.echo()

    uvicorn.run(
        "routinize.web:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=log_level if log_level in UVICORN_LOG_LEVELS else "warning",
    )
